# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

"""
Configuration centrale du storefront.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs (Supabase, Stripe), sécurité cookies, CORS
- Paramètres du checkout (devise, moyens de paiement, mode strict, retries)
Les constantes ci-dessous ne sont lues qu'à la construction des objets de
configuration (ex: CheckoutSettings.from_env()), jamais dans le handler lui-même.
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _env_flag(name: str, default: str = "false") -> bool:
    return _clean_env(os.getenv(name, default)).lower() in ("1", "true", "yes")

def _env_list(name: str, default: str) -> list[str]:
    return [v.strip() for v in os.getenv(name, default).split(",") if v.strip()]

# Supabase: URL et clés (anon/service)
# - SUPABASE_URL peut parfois être sans schéma: on préfixe en https:// si nécessaire
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or os.getenv("VITE_SUPABASE_URL") or "")
SUPABASE_ANON_KEY = _clean_env(os.getenv("SUPABASE_ANON_KEY") or os.getenv("SUPABASE_KEY") or "")
SUPABASE_SERVICE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# Cookies / sécurité
COOKIE_SECURE = _env_flag("COOKIE_SECURE")

# CORS (API générale) et origine autorisée pour la fonction de checkout
CORS_ORIGINS = _env_list("CORS_ORIGINS", "*")
CHECKOUT_ALLOWED_ORIGIN = _clean_env(os.getenv("CHECKOUT_ALLOWED_ORIGIN") or "*")

# Stripe
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")

# Checkout: devise, moyens de paiement, mode strict et budget de retry (lecture produits)
CHECKOUT_CURRENCY = _clean_env(os.getenv("CHECKOUT_CURRENCY") or "brl").lower()
CHECKOUT_PAYMENT_METHODS = _env_list("CHECKOUT_PAYMENT_METHODS", "card,boleto")
CHECKOUT_STRICT_PRODUCTS = _env_flag("CHECKOUT_STRICT_PRODUCTS")
CHECKOUT_READ_RETRIES = int(_clean_env(os.getenv("CHECKOUT_READ_RETRIES") or "1"))

LOG_LEVEL = _clean_env(os.getenv("LOG_LEVEL") or "info").lower()
