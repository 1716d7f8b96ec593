from datetime import datetime, timezone

from organic_trace.core.dates import normalize_timestamp
from organic_trace.services.assembler import is_set, user_name

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _timestamp_key(event):
    timestamp = normalize_timestamp(event.get("timestamp"))
    if timestamp is None:
        return (1, _EPOCH)
    return (0, timestamp)


def assemble_timeline(event_rows):
    """Order events oldest first and number them from 1.

    ``sorted`` is stable, so equal timestamps keep their fetch order; events
    without a usable timestamp go last.
    """
    ordered = sorted(event_rows, key=_timestamp_key)
    return [dict(event, step=step) for step, event in enumerate(ordered, start=1)]


def resolve_event_parties(event_rows, profile_index):
    resolved = []
    for event in event_rows:
        view = dict(event)
        for column, field in (("from_user", "from_user_name"), ("to_user", "to_user_name")):
            reference = event.get(column)
            if is_set(reference):
                view[field] = user_name(profile_index, reference)
        resolved.append(view)
    return resolved


__all__ = ["assemble_timeline", "resolve_event_parties"]
