class NotFoundError(Exception):
    """Raised when a referenced record does not exist (or is outside the caller's scope)."""
    pass
