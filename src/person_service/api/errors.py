"""Person store error taxonomy and HTTP status mapping."""

from enum import Enum


class ErrorCategory(str, Enum):
    """Error categorization for store failures."""

    NOT_FOUND = "not_found"  # No record with the requested id
    CONFLICT = "conflict"  # Create targeted an id already present
    INTERNAL = "internal"  # Store lock poisoned by an aborted write


class PersonStoreError(Exception):
    """Base class for person store failures."""

    category: ErrorCategory = ErrorCategory.INTERNAL


class PersonNotFoundError(PersonStoreError):
    """Raised when no person matches the requested id."""

    category = ErrorCategory.NOT_FOUND

    def __init__(self, person_id: int):
        super().__init__(f"Person {person_id} not found")
        self.person_id = person_id


class PersonConflictError(PersonStoreError):
    """Raised when creating a person whose id is already stored."""

    category = ErrorCategory.CONFLICT

    def __init__(self, person_id: int):
        super().__init__(f"Person {person_id} already exists")
        self.person_id = person_id


class StoreUnavailableError(PersonStoreError):
    """Raised when the store lock is poisoned and cannot be acquired."""

    category = ErrorCategory.INTERNAL

    def __init__(self, message: str = "Person store is unavailable"):
        super().__init__(message)


_STATUS_CODES = {
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.CONFLICT: 409,
    ErrorCategory.INTERNAL: 500,
}


def categorize_error(error: Exception) -> ErrorCategory:
    """Categorize an error raised by the person store.

    Args:
        error: Exception to categorize

    Returns:
        Error category, ``INTERNAL`` for anything that is not a store error
    """
    if isinstance(error, PersonStoreError):
        return error.category
    return ErrorCategory.INTERNAL


def status_code_for(error: Exception) -> int:
    """Map a store error to its HTTP status code."""
    return _STATUS_CODES[categorize_error(error)]
