"""
Typed errors raised by the store adapters and the users service
"""


class StoreError(Exception):
    """Base error for store and service failures"""


class ValidationError(StoreError):
    """A required field is missing or cannot be coerced"""


class ConstraintError(StoreError):
    """A relational schema rule (unique, check, not-null) was violated"""


class QueryError(StoreError):
    """A relational query or transport failure"""


class InsertError(StoreError):
    """The document driver failed to insert"""


class DocumentQueryError(StoreError):
    """The document driver failed to read, delete or update"""


class IdentityFormatError(StoreError):
    """An identity string cannot be converted to the backend's native key"""


class NotFoundError(StoreError):
    """The targeted record does not exist"""
