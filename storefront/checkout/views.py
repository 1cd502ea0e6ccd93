import json
import logging

from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse, Response

from storefront.utils.rate_limit import optional_rate_limit
from .errors import CheckoutError, ValidationError
from .service import CheckoutHandler
from .settings import CheckoutSettings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/checkout", tags=["Checkout API"])

SESSION_PATH = "/api/v1/checkout/session"

# module storefront.checkout.views
def get_checkout_handler(request: Request) -> CheckoutHandler:
    """
    Handler construit une fois par application (app.state), à partir de CheckoutSettings.
    En tests: app.dependency_overrides[get_checkout_handler] ou app.state.checkout_handler.
    """
    handler = getattr(request.app.state, "checkout_handler", None)
    if handler is None:
        settings = getattr(request.app.state, "checkout_settings", None) or CheckoutSettings.from_env()
        handler = CheckoutHandler.from_settings(settings)
        request.app.state.checkout_handler = handler
    return handler

def preflight_response(settings: CheckoutSettings) -> Response:
    """Réponse au preflight CORS: 200, corps vide, en-têtes permissifs."""
    return Response(status_code=200, headers=settings.cors_headers())

async def _read_body(request: Request):
    raw = await request.body()
    try:
        return json.loads(raw or b"")
    except ValueError:
        raise ValidationError("JSON inválido")

@router.options("/session", include_in_schema=False)
@router.options("/quote", include_in_schema=False)
async def checkout_preflight(handler: CheckoutHandler = Depends(get_checkout_handler)):
    return preflight_response(handler.settings)

@router.post("/session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_checkout_session(request: Request, handler: CheckoutHandler = Depends(get_checkout_handler)):
    """
    Crée une session Checkout Stripe pour un panier (checkout invité autorisé).
    - Entrée JSON: { "items": [ {"id", "addons": [...], "code"?} ], "customerEmail"?, "returnUrl" }
    - Étapes:
      1) Valider le corps (CheckoutRequest)
      2) Relire les prix de référence (table projects, Authorization transmis)
      3) Construire les lignes produit + add-ons
      4) Créer la session Stripe et renvoyer {url}
    - Erreurs: 400 {"error": message} pour toute CheckoutError
    """
    headers = handler.settings.cors_headers()
    try:
        body = await _read_body(request)
        result = handler.create_session(body, request.headers.get("authorization"))
        return JSONResponse(result, headers=headers)
    except CheckoutError as e:
        logger.warning("checkout.create_session error=%s type=%s", e.message, type(e).__name__)
        return JSONResponse({"error": e.message}, status_code=400, headers=headers)

@router.post("/quote")
async def quote_cart(request: Request, handler: CheckoutHandler = Depends(get_checkout_handler)):
    """
    Totaux du panier calculés côté serveur (aucune session créée).
    - Même corps que /session; réponse {line_items, total_minor, currency}
    """
    headers = handler.settings.cors_headers()
    try:
        body = await _read_body(request)
        return JSONResponse(handler.quote(body, request.headers.get("authorization")), headers=headers)
    except CheckoutError as e:
        return JSONResponse({"error": e.message}, status_code=400, headers=headers)
