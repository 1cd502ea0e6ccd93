from typing import List, Optional, Dict, Any
from storefront.infra.supabase_client import get_supabase, get_service_supabase
import logging

logger = logging.getLogger(__name__)

# module storefront.leads.repository
def insert_lead(data: Dict[str, Any]) -> Optional[dict]:
    """
    Insert public (RLS: insertion anonyme autorisée sur 'leads').
    Retourne la ligne créée, un dict truthy si la réponse n'inclut pas les lignes, None si échec.
    """
    try:
        res = get_supabase().table("leads").insert(data).execute()
        rows = getattr(res, "data", None) or []
        if isinstance(rows, list) and rows:
            return rows[0]
        return {"status": data.get("status", "ok")}
    except Exception:
        logger.exception("leads.repository.insert_lead failed email=%s", data.get("email"))
        return None

def fetch_leads(status: Optional[str] = None, limit: int = 200) -> List[dict]:
    """Leads pour l'admin, du plus récent au plus ancien (filtre status optionnel)."""
    try:
        query = (
            get_service_supabase()
            .table("leads")
            .select("*, projects(code)")
        )
        if status:
            query = query.eq("status", status)
        res = query.order("created_at", desc=True).limit(limit).execute()
        return res.data or []
    except Exception:
        logger.exception("leads.repository.fetch_leads failed status=%s", status)
        return []

def update_lead_status(lead_id: str, status: str) -> Optional[dict]:
    try:
        res = (
            get_service_supabase()
            .table("leads")
            .update({"status": status})
            .eq("id", lead_id)
            .execute()
        )
        rows = getattr(res, "data", None) or []
        if isinstance(rows, list) and rows:
            return rows[0]
        return {"status": status}
    except Exception:
        logger.exception("leads.repository.update_lead_status failed id=%s status=%s", lead_id, status)
        return None
