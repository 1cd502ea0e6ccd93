from typing import List
from storefront.infra.supabase_client import get_user_supabase
import logging

logger = logging.getLogger(__name__)

# module storefront.favorites.repository
# Toutes les opérations passent par le client utilisateur (RLS: user_id = auth.uid()).
def list_favorite_ids(user_id: str, user_token: str) -> List[str]:
    if not user_id:
        return []
    try:
        res = (
            get_user_supabase(user_token)
            .table("favorites")
            .select("project_id, created_at")
            .eq("user_id", user_id)
            .order("created_at", desc=False)
            .execute()
        )
        return [str(r.get("project_id")) for r in (res.data or []) if r.get("project_id")]
    except Exception:
        logger.exception("favorites.repository.list_favorite_ids failed user_id=%s", user_id)
        return []

def add_favorite(user_id: str, project_id: str, user_token: str) -> bool:
    try:
        (
            get_user_supabase(user_token)
            .table("favorites")
            .upsert({"user_id": user_id, "project_id": project_id}, on_conflict="user_id,project_id")
            .execute()
        )
        return True
    except Exception:
        logger.exception("favorites.repository.add_favorite failed user_id=%s project_id=%s", user_id, project_id)
        return False

def remove_favorite(user_id: str, project_id: str, user_token: str) -> bool:
    try:
        (
            get_user_supabase(user_token)
            .table("favorites")
            .delete()
            .eq("user_id", user_id)
            .eq("project_id", project_id)
            .execute()
        )
        return True
    except Exception:
        logger.exception("favorites.repository.remove_favorite failed user_id=%s project_id=%s", user_id, project_id)
        return False
