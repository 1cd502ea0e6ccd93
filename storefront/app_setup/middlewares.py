"""
Middlewares transverses de l’application.
- register_basic_middlewares: CORS pour l'API générale.
- register_security_middleware: en-têtes de sécurité (HSTS si COOKIE_SECURE).
- register_checkout_preflight_middleware: répond aux OPTIONS du checkout
  avant le CORSMiddleware générique (200, corps vide, en-têtes permissifs).
Notes:
- L’ordre d’ajout est important: le dernier middleware ajouté s’exécute en premier.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from storefront.config import CORS_ORIGINS, COOKIE_SECURE
from storefront.checkout.settings import CheckoutSettings
from storefront.checkout.views import preflight_response

CHECKOUT_PREFLIGHT_PATHS = {"/api/v1/checkout/session", "/api/v1/checkout/quote"}

def register_basic_middlewares(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")
        if COOKIE_SECURE:
            response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains; preload")
        return response

def register_checkout_preflight_middleware(app: FastAPI) -> None:
    """
    Doit être ajouté après register_basic_middlewares pour passer avant le CORS générique.
    """
    @app.middleware("http")
    async def checkout_preflight(request: Request, call_next):
        if request.method == "OPTIONS" and request.url.path.rstrip("/") in CHECKOUT_PREFLIGHT_PATHS:
            settings = getattr(request.app.state, "checkout_settings", None) or CheckoutSettings.from_env()
            return preflight_response(settings)
        return await call_next(request)
