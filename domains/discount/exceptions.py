class DiscountError(Exception):
    """Base exception for discount validation."""


class DiscountRequestError(DiscountError):
    """The request itself is unusable (missing fields, bad amount) -> 400."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DiscountTableError(DiscountError):
    """The discount code table could not be loaded."""
