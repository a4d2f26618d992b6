"""
Exception Hierarchy

Only genuine contract violations and storage failures are raised.
Eligibility failures and a declined restaurant switch are ordinary
return values and never appear here.
"""

from typing import Optional


class ToHomeError(Exception):
    """Base class for all package errors."""


class CartError(ToHomeError):
    """Base class for cart store errors."""


class InvalidQuantityError(CartError, ValueError):
    """Raised when a non-positive quantity is passed to add_item."""

    def __init__(self, qty: int):
        self.qty = qty
        super().__init__(f"Quantity must be a positive integer, got {qty}")


class CartNotHydratedError(CartError):
    """Raised when a mutation is issued before the store finished hydrating."""


class CartStorageError(CartError):
    """Raised when the cart snapshot cannot be read from or written to storage."""


class CorruptSnapshotError(CartStorageError):
    """Raised when a stored snapshot cannot be decoded as UTF-8 text."""


class OptionSelectionError(ToHomeError):
    """
    Raised when an option selection does not satisfy the catalog.

    Attributes:
        code: Machine-readable error code (e.g. "OPTION_MIN_NOT_MET")
        message: Human-readable explanation
        ref: Id of the offending product, group or option item
    """

    PRODUCT_NOT_ACTIVE = "PRODUCT_NOT_ACTIVE"
    OPTION_NOT_FOUND = "OPTION_NOT_FOUND"
    OPTION_NOT_ACTIVE = "OPTION_NOT_ACTIVE"
    OPTION_MIN_NOT_MET = "OPTION_MIN_NOT_MET"
    OPTION_MAX_EXCEEDED = "OPTION_MAX_EXCEEDED"

    def __init__(self, code: str, message: str, ref: Optional[str] = None):
        self.code = code
        self.message = message
        self.ref = ref
        super().__init__(f"{code}: {message}")

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"error": self.code, "message": self.message, "ref": self.ref}
