"""
Gestionnaires d’exceptions.
- HTTPException: JSON FastAPI standard {"detail": ...}.
- CheckoutError échappée hors de la vue checkout: 400 {"error": message}.
"""
import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from storefront.checkout.errors import CheckoutError

logger = logging.getLogger(__name__)

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))

    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError):
        logger.warning("checkout error path=%s type=%s message=%s", request.url.path, type(exc).__name__, exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})
