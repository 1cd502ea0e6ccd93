"""
Cas d'usage 'checkout': orchestre validation, lecture des prix, tarification et Stripe.
"""
import logging
from typing import Any, Dict, List, Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from . import pricing
from .errors import ValidationError
from .models import CheckoutRequest, CheckoutSessionRequest, LineItem
from .repository import SupabaseProjectStore
from .settings import CheckoutSettings
from .stripe_client import StripeCheckoutGateway, line_items_payload

logger = logging.getLogger(__name__)


class ProjectStore(Protocol):
    def fetch_projects(self, ids: List[str], authorization: Optional[str] = None) -> List[Dict[str, Any]]: ...


class PaymentGateway(Protocol):
    def create_session(self, request: CheckoutSessionRequest) -> Dict[str, Any]: ...


def parse_checkout_request(body: Any) -> CheckoutRequest:
    """
    Valide le corps JSON à la frontière.
    Soulève ValidationError (checkout) avec un message lisible.
    """
    if not isinstance(body, dict):
        raise ValidationError("Corpo da requisição inválido")
    if not body.get("items"):
        raise ValidationError("Carrinho vazio")
    try:
        return CheckoutRequest.model_validate(body)
    except PydanticValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        where = ".".join(str(p) for p in first.get("loc", ()))
        raise ValidationError(f"Requisição inválida ({where}): {first.get('msg', 'inválido')}")


# module storefront.checkout.service
class CheckoutHandler:
    """
    Pipeline requête -> validation -> tarification -> Stripe -> {url}.
    Sans état entre invocations; store et gateway sont injectés (doubles en tests).
    """

    def __init__(self, settings: CheckoutSettings, store: ProjectStore, gateway: PaymentGateway):
        self.settings = settings
        self.store = store
        self.gateway = gateway

    @classmethod
    def from_settings(cls, settings: CheckoutSettings) -> "CheckoutHandler":
        store = SupabaseProjectStore(
            settings.supabase_url,
            settings.supabase_key,
            read_retries=settings.read_retries,
        )
        return cls(settings, store, StripeCheckoutGateway(settings.stripe_secret_key))

    def price_cart(self, request: CheckoutRequest, authorization: Optional[str] = None) -> List[LineItem]:
        """
        Relit les projets en une seule lecture puis construit les lignes tarifées.
        Les prix éventuellement envoyés par le client ne sont jamais lus.
        """
        rows = self.store.fetch_projects(request.product_ids(), authorization)
        catalog = pricing.products_by_id(rows)
        line_items, missing = pricing.build_line_items(
            request.items, catalog, strict=self.settings.strict_unknown_products
        )
        if missing:
            logger.warning("checkout.price_cart skipped unknown products ids=%s", missing)
        return line_items

    def build_session_request(self, request: CheckoutRequest, line_items: List[LineItem]) -> CheckoutSessionRequest:
        success_url, cancel_url = pricing.redirect_urls(request.return_url)
        return CheckoutSessionRequest(
            line_items=line_items,
            success_url=success_url,
            cancel_url=cancel_url,
            currency=self.settings.currency,
            payment_method_types=list(self.settings.payment_method_types),
            customer_email=request.customer_email,
            metadata=pricing.make_metadata(request.items),
        )

    def create_session(self, body: Any, authorization: Optional[str] = None) -> Dict[str, str]:
        """
        Crée une session de paiement hébergée et retourne {"url": ...}.
        Erreurs: ValidationError, UpstreamDataError, PaymentProviderError (jamais de retry côté Stripe).
        """
        request = parse_checkout_request(body)
        line_items = self.price_cart(request, authorization)
        session_request = self.build_session_request(request, line_items)
        session = self.gateway.create_session(session_request)
        logger.info(
            "checkout.session created id=%s lines=%s total_minor=%s",
            session.get("id"), len(line_items), session_request.total_minor(),
        )
        return {"url": session["url"]}

    def quote(self, body: Any, authorization: Optional[str] = None) -> Dict[str, Any]:
        """
        Même tarification que create_session, sans appel au prestataire.
        Retour: {"line_items", "total_minor", "currency"}
        """
        if isinstance(body, dict) and not body.get("returnUrl"):
            # returnUrl sans objet pour un devis
            body = {**body, "returnUrl": "/"}
        request = parse_checkout_request(body)
        line_items = self.price_cart(request, authorization)
        return {
            "line_items": line_items_payload(line_items, self.settings.currency),
            "total_minor": sum(li.unit_amount_minor * li.quantity for li in line_items),
            "currency": self.settings.currency,
        }
