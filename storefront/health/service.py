"""
Sonde Supabase pour /health/supabase: résolution DNS de l'hôte puis
lecture d'une ligne dans chaque table utilisée par le storefront.
"""
from typing import Any, Dict, Iterable, Optional
from urllib.parse import urlparse
import logging
import socket

from storefront import config
from storefront.infra.supabase_client import get_supabase

logger = logging.getLogger(__name__)

PROBED_TABLES = ("projects", "project_styles", "leads")

def resolve_host(url: str) -> Dict[str, Any]:
    host = urlparse(url).hostname if url else None
    if not host:
        return {"host": None, "ok": None}
    try:
        socket.getaddrinfo(host, 443)
        return {"host": host, "ok": True}
    except OSError as e:
        return {"host": host, "ok": False, "error": str(e)}

def probe_tables(client, tables: Iterable[str] = PROBED_TABLES) -> Dict[str, Dict[str, Any]]:
    out: Dict[str, Dict[str, Any]] = {}
    for name in tables:
        try:
            res = client.table(name).select("id").limit(1).execute()
            out[name] = {"ok": True, "rows": len(res.data or [])}
        except Exception as e:
            logger.warning("health.probe_tables failed table=%s error=%s", name, e)
            out[name] = {"ok": False, "error": str(e)}
    return out

def health_supabase_info() -> Dict[str, Any]:
    info: Dict[str, Any] = {
        "supabase_url": config.SUPABASE_URL or None,
        "service_key_set": bool(config.SUPABASE_SERVICE_KEY),
        "dns": resolve_host(config.SUPABASE_URL),
        "connect_ok": False,
        "error": None,
        "tables": {},
    }
    error: Optional[str] = None
    try:
        info["tables"] = probe_tables(get_supabase())
        info["connect_ok"] = all(t["ok"] for t in info["tables"].values())
    except Exception as e:
        error = str(e)
    info["error"] = error
    return info
