class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EmployeeNotFoundError(DomainError):
    """Raised when no employee profile exists for a payroll target."""


class StorageError(DomainError):
    """Raised when a repository adapter fails to read or write."""
