class DomainError(Exception):
    """Base exception for leave management errors."""


class ValidationError(DomainError):
    """Raised when input data is malformed (bad date strings, blank fields)."""


class StorageError(DomainError):
    """Raised when the repository cannot complete a read or write.

    No state change is assumed to have happened when this is raised.
    """
