class TaskValidationError(ValueError):
    """Raised when task input has the wrong shape (e.g. missing or blank title)."""


class PersistenceError(RuntimeError):
    """Raised when the task store is unreachable or rejects an operation."""
