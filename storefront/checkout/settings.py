"""
Configuration explicite du checkout, injectée à la construction du handler.
"""
from typing import Tuple

from pydantic import BaseModel, ConfigDict

CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"


class CheckoutSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    supabase_url: str = ""
    supabase_key: str = ""
    stripe_secret_key: str = ""
    allowed_origin: str = "*"
    currency: str = "brl"
    payment_method_types: Tuple[str, ...] = ("card", "boleto")
    strict_unknown_products: bool = False
    read_retries: int = 1

    @classmethod
    def from_env(cls) -> "CheckoutSettings":
        """Construit les réglages à partir de storefront.config (.env)."""
        from storefront import config

        return cls(
            supabase_url=config.SUPABASE_URL,
            supabase_key=config.SUPABASE_ANON_KEY,
            stripe_secret_key=config.STRIPE_SECRET_KEY,
            allowed_origin=config.CHECKOUT_ALLOWED_ORIGIN,
            currency=config.CHECKOUT_CURRENCY,
            payment_method_types=tuple(config.CHECKOUT_PAYMENT_METHODS),
            strict_unknown_products=config.CHECKOUT_STRICT_PRODUCTS,
            read_retries=config.CHECKOUT_READ_RETRIES,
        )

    def cors_headers(self) -> dict:
        return {
            "Access-Control-Allow-Origin": self.allowed_origin,
            "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        }
