"""
Module 'checkout' (feature-first): point d'entrée public.
Réunit tarification serveur, lecture des projets, client Stripe et handler HTTP.
"""

from .errors import CheckoutError, ValidationError, UpstreamDataError, PaymentProviderError
from .models import AddonKind, CartItem, CheckoutRequest, Product, LineItem, CheckoutSessionRequest
from .pricing import to_minor_units, products_by_id, build_line_items, make_metadata, redirect_urls
from .repository import SupabaseProjectStore
from .stripe_client import StripeCheckoutGateway, to_session_params
from .settings import CheckoutSettings
from .service import CheckoutHandler, parse_checkout_request

__all__ = [
    # errors
    "CheckoutError",
    "ValidationError",
    "UpstreamDataError",
    "PaymentProviderError",
    # models
    "AddonKind",
    "CartItem",
    "CheckoutRequest",
    "Product",
    "LineItem",
    "CheckoutSessionRequest",
    # pricing
    "to_minor_units",
    "products_by_id",
    "build_line_items",
    "make_metadata",
    "redirect_urls",
    # adapters
    "SupabaseProjectStore",
    "StripeCheckoutGateway",
    "to_session_params",
    # handler
    "CheckoutSettings",
    "CheckoutHandler",
    "parse_checkout_request",
]
