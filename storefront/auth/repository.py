from typing import Optional, Dict, Any
import logging
from storefront.infra.supabase_client import get_supabase, get_service_supabase

logger = logging.getLogger(__name__)

# module storefront.auth.repository
def get_user_from_access_token(access_token: str) -> Dict[str, Any]:
    """
    Wrapper Supabase Auth: résout un JWT via auth.get_user(access_token).
    Retourne {id, email, user_metadata} ou {} si le token est invalide.
    """
    res = get_supabase().auth.get_user(access_token)
    user = getattr(res, "user", None)
    if not user:
        return {}
    return {
        "id": getattr(user, "id", None),
        "email": getattr(user, "email", None),
        "user_metadata": getattr(user, "user_metadata", None) or {},
    }

def get_profile_role(user_id: str) -> Optional[str]:
    """
    Rôle back-office (table 'profiles'): master | partner | employee.
    Retourne None si aucun profil (client du site) ou en cas d'erreur.
    """
    if not user_id:
        return None
    try:
        res = (
            get_service_supabase()
            .table("profiles")
            .select("role")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return (rows[0] or {}).get("role") if rows else None
    except Exception:
        logger.exception("auth.repository.get_profile_role failed user_id=%s", user_id)
        return None
