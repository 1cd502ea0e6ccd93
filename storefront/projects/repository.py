from typing import List, Optional, Dict, Any
from datetime import datetime, timezone
from storefront.infra.supabase_client import get_supabase, get_service_supabase
import logging

logger = logging.getLogger(__name__)

# module storefront.projects.repository
def list_published_projects() -> List[dict]:
    """
    Projets publiés (deleted_at null) avec leurs images, du plus récent au plus ancien.
    - Retourne [] en cas d'erreur.
    """
    try:
        res = (
            get_supabase()
            .table("projects")
            .select("*, project_images(*)")
            .is_("deleted_at", "null")
            .order("created_at", desc=True)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("projects.repository.list_published_projects failed")
        return []

def get_project_by_slug(slug: str) -> Optional[dict]:
    if not slug:
        return None
    try:
        res = (
            get_supabase()
            .table("projects")
            .select("*, project_images(*)")
            .eq("slug", slug)
            .is_("deleted_at", "null")
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("projects.repository.get_project_by_slug failed slug=%s", slug)
        return None

def get_project(project_id: str) -> Optional[dict]:
    if not project_id:
        return None
    try:
        res = (
            get_supabase()
            .table("projects")
            .select("*")
            .eq("id", project_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("projects.repository.get_project failed id=%s", project_id)
        return None

def fetch_projects_by_ids(ids: List[str]) -> List[dict]:
    """
    Récupère les projets par leurs IDs (table 'projects').
    - Retourne [] si ids vide ou en cas d'erreur.
    """
    if not ids:
        return []
    try:
        res = (
            get_supabase()
            .table("projects")
            .select("id, title, slug, code, price")
            .in_("id", [str(i) for i in ids])
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("projects.repository.fetch_projects_by_ids failed ids=%s", ids)
        return []

def increment_view(slug: str) -> bool:
    """Compteur de vues via la RPC increment_project_view (best-effort)."""
    try:
        get_supabase().rpc("increment_project_view", {"p_slug": slug}).execute()
        return True
    except Exception:
        logger.warning("projects.repository.increment_view failed slug=%s", slug)
        return False

def list_all_projects(limit: int = 200) -> List[dict]:
    """Tous les projets (y compris supprimés) pour le back-office."""
    try:
        res = (
            get_service_supabase()
            .table("projects")
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("projects.repository.list_all_projects failed")
        return []

def create_project(data: Dict[str, Any]) -> Optional[dict]:
    try:
        res = get_service_supabase().table("projects").insert(data).execute()
        rows = getattr(res, "data", None) or []
        if isinstance(rows, list) and rows:
            return rows[0]
        return {"status": "ok"}
    except Exception:
        logger.exception("projects.repository.create_project failed data=%s", data)
        return None

def update_project(project_id: str, data: Dict[str, Any]) -> Optional[dict]:
    try:
        res = (
            get_service_supabase()
            .table("projects")
            .update(data)
            .eq("id", project_id)
            .execute()
        )
        rows = getattr(res, "data", None) or []
        if isinstance(rows, list) and rows:
            return rows[0]
        return {"status": "ok"}
    except Exception:
        logger.exception("projects.repository.update_project failed id=%s data=%s", project_id, data)
        return None

def soft_delete_project(project_id: str) -> bool:
    try:
        (
            get_service_supabase()
            .table("projects")
            .update({"deleted_at": datetime.now(timezone.utc).isoformat()})
            .eq("id", project_id)
            .execute()
        )
        return True
    except Exception:
        logger.exception("projects.repository.soft_delete_project failed id=%s", project_id)
        return False
