class RemoteError(Exception):
    """Failure reported by the table client (network, HTTP status, constraint, permission)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ValueError):
    """First violated form rule; raised before any network call."""

    def __init__(self, field: str, rule: str, message: str):
        super().__init__(message)
        self.field = field
        self.rule = rule
        self.message = message

    def as_dict(self) -> dict:
        return {"detail": self.message, "field": self.field, "rule": self.rule}


class TraceNotFound(LookupError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


__all__ = ["RemoteError", "TraceNotFound", "ValidationError"]
