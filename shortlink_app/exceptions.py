"""Exceptions raised by the short link registry and its storage backends.

Classes:
    ShortLinkError:
        Generic base class for all service exceptions.

    DuplicateCodeError:
        Raised when a custom short code is already taken.

    CodeGenerationExhaustedError:
        Raised when no unique random short code was found within the attempt bound.

    ValidityOutOfRangeError:
        Raised when created_at + validity does not fit in a datetime.

    StorageError:
        Raised when the key-value storage cannot be read or written.

    StorageQuotaExceededError:
        Raised when a write would exceed the storage quota.

Validation problems are not exceptions here: they are reported per field by the
request schemas. "Not found" and "expired" are redirect states, not errors.
"""


class ShortLinkError(Exception):
    """Generic base class for short link exceptions."""

    pass


class DuplicateCodeError(ShortLinkError):
    """Exception raised when a custom short code already exists in the table."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Custom shortcode '{short_code}' already exists")


class CodeGenerationExhaustedError(ShortLinkError):
    """Exception raised when a unique short code could not be generated."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Unable to generate unique short code after {attempts} attempts")


class StorageError(ShortLinkError):
    """Exception raised when the key-value storage fails.

    e.g. connection issues, corrupt rows, database errors, etc.
    """

    pass


class StorageQuotaExceededError(StorageError):
    """Exception raised when a write would exceed the storage quota."""

    pass


class ValidityOutOfRangeError(ShortLinkError):
    """Exception raised when the expiry time falls outside the supported date range."""

    def __init__(self, validity_minutes: int):
        self.validity_minutes = validity_minutes
        super().__init__(f"Validity of {validity_minutes} minutes is out of range")
