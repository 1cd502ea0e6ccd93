# module storefront.admin.service

from typing import List, Optional, Dict, Any
from storefront.admin import repository as admin_repository
from storefront.leads import service as leads_service
from storefront.projects import repository as projects_repository
from storefront.styles import repository as styles_repository
import logging

logger = logging.getLogger(__name__)

# Colonnes modifiables depuis le back-office
PROJECT_FIELDS = {
    "title", "slug", "code", "description", "price",
    "price_electrical", "price_hydraulic", "price_sanitary", "price_structural",
    "width_meters", "depth_meters", "bedrooms", "bathrooms", "suites",
    "garage_spots", "built_area", "style", "is_featured",
}

def _audit(user: Dict[str, Any], action: str, entity: str, entity_id: Optional[str], details: Optional[Dict[str, Any]] = None) -> None:
    admin_repository.insert_audit_log(
        user_id=user.get("id"), action=action, entity=entity, entity_id=entity_id, details=details
    )

def dashboard_stats() -> Dict[str, int]:
    return {
        "projects_count": admin_repository.count_table_rows("projects"),
        "leads_count": admin_repository.count_table_rows("leads"),
        "styles_count": admin_repository.count_table_rows("project_styles"),
    }

def clean_project_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Filtre les colonnes inconnues (id, deleted_at, views... ne sont jamais écrits ici)."""
    return {k: v for k, v in (data or {}).items() if k in PROJECT_FIELDS}

# Leads
def list_leads(status: Optional[str] = None, limit: int = 200) -> List[dict]:
    return leads_service.list_leads(status=status, limit=limit)

def update_lead_status(user: Dict[str, Any], lead_id: str, status: str) -> Optional[dict]:
    updated = leads_service.set_status(lead_id, status)
    if updated:
        _audit(user, "UPDATE", "LEADS", lead_id, {"status": status})
    return updated

# Projets
def list_projects(limit: int = 200) -> List[dict]:
    return projects_repository.list_all_projects(limit=limit)

def create_project(user: Dict[str, Any], data: Dict[str, Any]) -> Optional[dict]:
    created = projects_repository.create_project(clean_project_data(data))
    if created:
        _audit(user, "CREATE", "PROJECTS", created.get("id"), {"title": data.get("title")})
    return created

def update_project(user: Dict[str, Any], project_id: str, data: Dict[str, Any]) -> Optional[dict]:
    updated = projects_repository.update_project(project_id, clean_project_data(data))
    if updated:
        _audit(user, "UPDATE", "PROJECTS", project_id, {"fields": sorted(clean_project_data(data))})
    return updated

def delete_project(user: Dict[str, Any], project_id: str) -> bool:
    ok = projects_repository.soft_delete_project(project_id)
    if ok:
        _audit(user, "DELETE", "PROJECTS", project_id)
    return ok

# Styles
def create_style(user: Dict[str, Any], name: str) -> Optional[dict]:
    created = styles_repository.create_style(name)
    if created:
        _audit(user, "CREATE", "SETTINGS", created.get("id"), {"style": name})
    return created

def delete_style(user: Dict[str, Any], style_id: str) -> bool:
    ok = styles_repository.delete_style(style_id)
    if ok:
        _audit(user, "DELETE", "SETTINGS", style_id)
    return ok
