from typing import Any, Dict, List, Optional

from . import repository
from .models import LeadCreate

def lead_row(lead: LeadCreate) -> Dict[str, Any]:
    """
    Ligne 'leads' à partir du formulaire de capture.
    Le panier est conservé dans metadata.cart_items pour le back-office,
    le titre du projet (si fourni) dans metadata.project_title.
    """
    row: Dict[str, Any] = {
        "name": lead.name,
        "email": str(lead.email),
        "phone": lead.whatsapp,
        "message": lead.message,
        "project_id": lead.project_id,
        "source": lead.source,
        "status": "new",
        "metadata": {"cart_items": [item.model_dump() for item in lead.cart_items]},
    }
    if lead.project_title:
        row["metadata"]["project_title"] = lead.project_title
    if lead.cart_items:
        row["selected_packages"] = sorted({a for item in lead.cart_items for a in item.addons})
        if not lead.project_id:
            row["project_id"] = lead.cart_items[0].id
    return row

def capture_lead(lead: LeadCreate) -> Optional[Dict[str, Any]]:
    return repository.insert_lead(lead_row(lead))

def list_leads(status: Optional[str] = None, limit: int = 200) -> List[Dict[str, Any]]:
    return repository.fetch_leads(status=status, limit=limit)

def set_status(lead_id: str, status: str) -> Optional[Dict[str, Any]]:
    return repository.update_lead_status(lead_id, status)
