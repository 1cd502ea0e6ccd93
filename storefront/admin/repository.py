from typing import Any, Dict, Optional
from storefront.infra.supabase_client import get_service_supabase
import logging

logger = logging.getLogger(__name__)

# module storefront.admin.repository
def count_table_rows(table_name: str) -> int:
    """
    Compte les lignes d'une table via Supabase.
    Utilise count='exact' si disponible, sinon fallback sur len(data).
    """
    try:
        client = get_service_supabase()
        res = client.table(table_name).select("id", count="exact").execute()
        if getattr(res, "count", None) is not None:
            return int(res.count)  # type: ignore
        return len(res.data or [])
    except Exception:
        logger.exception("admin.repository.count_table_rows failed table=%s", table_name)
        return 0

def insert_audit_log(
    *,
    user_id: Optional[str],
    action: str,
    entity: str,
    entity_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> bool:
    """
    Journal d'audit (table 'system_logs'), best-effort: ne lève jamais.
    """
    if not user_id:
        return False
    try:
        (
            get_service_supabase()
            .table("system_logs")
            .insert({
                "user_id": user_id,
                "action_type": action,
                "entity": entity,
                "entity_id": entity_id,
                "details": details or {},
            })
            .execute()
        )
        return True
    except Exception:
        logger.exception("admin.repository.insert_audit_log failed action=%s entity=%s", action, entity)
        return False
