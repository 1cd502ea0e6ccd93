from typing import Optional
from supabase import create_client, Client
from storefront.config import SUPABASE_URL, SUPABASE_ANON_KEY, SUPABASE_SERVICE_KEY

_supabase: Optional[Client] = None
_service_supabase: Optional[Client] = None

def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Extrait le JWT d'un en-tête Authorization ("Bearer <jwt>").
    Retourne None si l'en-tête est absent ou vide.
    """
    value = (authorization or "").strip()
    if value.lower().startswith("bearer "):
        value = value[7:].strip()
    return value or None

def create_supabase_client(url: str, key: str, user_token: Optional[str] = None) -> Client:
    """
    Client Supabase dédié (non partagé).
    - user_token: si fourni, les requêtes PostgREST portent ce JWT (RLS appliquée au nom de l'utilisateur).
    """
    client = create_client(url, key)
    if user_token:
        client.postgrest.auth(user_token)
    return client

def get_supabase() -> Client:
    global _supabase
    if _supabase is None:
        _supabase = create_client(SUPABASE_URL, SUPABASE_ANON_KEY)
    return _supabase

def get_service_supabase() -> Client:
    global _service_supabase
    if not SUPABASE_SERVICE_KEY:
        raise RuntimeError("SUPABASE_SERVICE_KEY manquant pour get_service_supabase()")
    if _service_supabase is None:
        _service_supabase = create_client(SUPABASE_URL, SUPABASE_SERVICE_KEY)
    return _service_supabase

def get_user_supabase(user_token: str) -> Client:
    """
    Client Supabase 'anon' avec auth utilisateur (RLS actif).
    À utiliser pour opérer au nom d'un utilisateur sans polluer l'instance globale.
    """
    if not user_token:
        raise ValueError("user_token is required")
    return create_supabase_client(SUPABASE_URL, SUPABASE_ANON_KEY, user_token)
