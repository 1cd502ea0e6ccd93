from typing import List, Optional
from storefront.infra.supabase_client import get_supabase, get_service_supabase
import logging

logger = logging.getLogger(__name__)

class DuplicateStyleError(Exception):
    pass

def _is_unique_violation(e: Exception) -> bool:
    msg = str(e).lower()
    return "unique" in msg or "23505" in msg or "duplicate" in msg

# module storefront.styles.repository
def list_styles() -> List[dict]:
    try:
        res = get_supabase().table("project_styles").select("*").order("name").execute()
        return res.data or []
    except Exception:
        logger.exception("styles.repository.list_styles failed")
        return []

def create_style(name: str) -> Optional[dict]:
    """
    Insère un style; DuplicateStyleError si le nom existe déjà (contrainte unique).
    """
    try:
        res = get_service_supabase().table("project_styles").insert({"name": name}).execute()
        rows = getattr(res, "data", None) or []
        if isinstance(rows, list) and rows:
            return rows[0]
        return {"name": name}
    except Exception as e:
        if _is_unique_violation(e):
            raise DuplicateStyleError(name) from e
        logger.exception("styles.repository.create_style failed name=%s", name)
        return None

def delete_style(style_id: str) -> bool:
    try:
        get_service_supabase().table("project_styles").delete().eq("id", style_id).execute()
        return True
    except Exception:
        logger.exception("styles.repository.delete_style failed id=%s", style_id)
        return False
