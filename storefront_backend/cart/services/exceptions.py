# cart/services/exceptions.py

"""
CART SERVICE ERRORS

Centralized domain errors for cart, pricing and checkout services.
"""


class CartError(Exception):
    """Base exception for all cart service failures."""


class InvalidQuantityError(CartError, ValueError):
    """Raised when a cart addition carries a non-positive or non-integer quantity."""


class InvalidLineKeyError(CartError, ValueError):
    """Raised when a line signature cannot be parsed back into a LineKey."""


class EmptyCartError(CartError):
    """Raised when checkout is attempted on a cart with no lines."""


class MissingOrderPhoneError(CartError):
    """Raised when checkout has no order channel phone to send to."""


class UnsupportedVariantError(CartError, ValueError):
    """Raised when a pack or dietary variant is requested that the product does not offer."""
