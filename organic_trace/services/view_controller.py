import logging

logger = logging.getLogger(__name__)


class ViewController:
    """Holds the latest assembled records for one view.

    Every refresh takes a generation number. A load that finishes after a newer
    refresh started, or after the view was dismissed, is dropped.
    """

    def __init__(self, loader, *, name="view"):
        self._loader = loader
        self._generation = 0
        self.name = name
        self.records = []
        self.options = {}
        self.error = None

    @property
    def generation(self):
        return self._generation

    def dismiss(self):
        self._generation += 1

    async def refresh(self) -> bool:
        self._generation += 1
        generation = self._generation
        result = await self._loader()
        if generation != self._generation:
            logger.debug("Discarding stale %s result (generation %s)", self.name, generation)
            return False
        self.records = result.records
        self.options = result.options
        self.error = result.error
        return True

    async def submit(self, submit, data):
        row = await submit(data)
        await self.refresh()
        return row
