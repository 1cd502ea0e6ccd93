"""
Adaptateur Stripe: centralise la création des sessions Checkout.
"""
import logging
from typing import Any, Dict, List, Optional

import stripe

from .errors import PaymentProviderError
from .models import CheckoutSessionRequest, LineItem

logger = logging.getLogger(__name__)

# module storefront.checkout.stripe_client
def to_stripe_line_item(line: LineItem, currency: str) -> Dict[str, Any]:
    """
    Ligne Stripe 'price_data' (montant en centimes, quantité 1).
    """
    product_data: Dict[str, Any] = {"name": line.name, "metadata": line.metadata()}
    if line.description:
        product_data["description"] = line.description
    return {
        "price_data": {
            "currency": currency,
            "unit_amount": line.unit_amount_minor,
            "product_data": product_data,
        },
        "quantity": line.quantity,
    }

def to_session_params(request: CheckoutSessionRequest) -> Dict[str, Any]:
    """
    Paramètres de stripe.checkout.Session.create pour une CheckoutSessionRequest.
    customer_email n'est transmis que s'il est renseigné.
    """
    params: Dict[str, Any] = {
        "payment_method_types": list(request.payment_method_types),
        "line_items": [to_stripe_line_item(li, request.currency) for li in request.line_items],
        "mode": request.mode,
        "success_url": request.success_url,
        "cancel_url": request.cancel_url,
        "metadata": dict(request.metadata),
    }
    if request.customer_email:
        params["customer_email"] = request.customer_email
    return params

class StripeCheckoutGateway:
    """
    Passerelle vers Stripe Checkout.
    - La clé API est passée à chaque appel (pas de stripe.api_key global).
    - Aucun retry: la création de session n'est pas idempotente.
    """

    def __init__(self, api_key: str, sessions: Any = None):
        self.api_key = api_key
        self._sessions = sessions or stripe.checkout.Session

    def create_session(self, request: CheckoutSessionRequest) -> Dict[str, Any]:
        """
        Crée la session hébergée et retourne {"id", "url"}.
        Soulève PaymentProviderError si Stripe refuse ou si l'appel échoue.
        """
        if not self.api_key:
            raise PaymentProviderError("STRIPE_SECRET_KEY manquant")
        params = to_session_params(request)
        try:
            session = self._sessions.create(api_key=self.api_key, **params)
        except stripe.StripeError as e:
            logger.exception("checkout.stripe_client.create_session rejected lines=%s", len(params["line_items"]))
            raise PaymentProviderError(getattr(e, "user_message", None) or str(e))
        except Exception as e:
            logger.exception("checkout.stripe_client.create_session failed")
            raise PaymentProviderError(str(e))
        url = _get(session, "url")
        if not url:
            raise PaymentProviderError("Sessão Stripe inválida")
        return {"id": _get(session, "id"), "url": url}

def _get(obj: Any, key: str) -> Optional[Any]:
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)

def line_items_payload(lines: List[LineItem], currency: str) -> List[Dict[str, Any]]:
    return [to_stripe_line_item(li, currency) for li in lines]
