"""
Factory d’application utilisée par les entrypoints (storefront.app, storefront.asgi).
Ordonne les étapes d’initialisation de manière lisible et testable.
"""
import logging
from typing import Optional

from fastapi import FastAPI

from storefront.config import LOG_LEVEL
from storefront.checkout.settings import CheckoutSettings
from .lifespan import lifespan
from .middlewares import (
    register_basic_middlewares,
    register_security_middleware,
    register_checkout_preflight_middleware,
)
from .exceptions import register_exception_handlers
from .routers import register_routers

def create_app(checkout_settings: Optional[CheckoutSettings] = None) -> FastAPI:
    """
    Construit l’app FastAPI avec le lifespan et enregistre:
      - CORS, en-têtes de sécurité, preflight checkout (ajouté en dernier pour s’exécuter en premier)
      - gestionnaires d’exceptions
      - tous les routers (API, admin, health)
    checkout_settings: réglages explicites du checkout (sinon lus depuis l'environnement au premier appel).
    """
    logging.getLogger("storefront").setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))
    app = FastAPI(title="Storefront API", lifespan=lifespan)
    app.state.checkout_settings = checkout_settings
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_checkout_preflight_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
