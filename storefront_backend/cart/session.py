# cart/session.py

"""
CART <-> SESSION BINDING

The cart lives in the client session (signed cookie engine), never in the
database. Views load one Cart per request, mutate it, then save it back.
"""

from __future__ import annotations

from cart.services.cart_service import Cart

SESSION_KEY = "cart"


def load_cart(request) -> Cart:
    return Cart.from_dict(request.session.get(SESSION_KEY) or {})


def save_cart(request, cart: Cart) -> None:
    request.session[SESSION_KEY] = cart.to_dict()
    request.session.modified = True
