from typing import Any, Dict, Optional
from fastapi import APIRouter, HTTPException, Query

from . import service as projects_service
from . import repository as projects_repository

router = APIRouter(prefix="/api/v1/projects", tags=["Projects API"])

# module storefront.projects.views
@router.get("")
def list_projects(
    width: Optional[float] = Query(default=None, gt=0),
    depth: Optional[float] = Query(default=None, gt=0),
    bedrooms: Optional[int] = Query(default=None, ge=0),
    style: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Catalogue public filtré par dimensions du terrain, quartos et estilo.
    """
    items = projects_service.search_projects(width=width, depth=depth, bedrooms=bedrooms, style=style)
    return {"items": items, "count": len(items)}

@router.get("/lookup")
def lookup_projects(ids: str = "") -> Dict[str, Any]:
    """
    Hydratation du panier: ids séparés par des virgules.
    """
    id_list = [i.strip() for i in (ids or "").split(",") if i.strip()]
    if not id_list:
        return {"items": []}
    return {"items": projects_service.lookup_projects(id_list)}

@router.get("/{project_id}/addons")
def project_addons(project_id: str) -> Dict[str, Any]:
    project = projects_repository.get_project(project_id)
    if not project or project.get("deleted_at"):
        raise HTTPException(status_code=404, detail="Projeto não encontrado")
    return {"project_id": project_id, "packages": projects_service.available_packages(project)}

@router.get("/{slug}")
def project_detail(slug: str) -> Dict[str, Any]:
    project = projects_service.get_project_page(slug)
    if not project:
        raise HTTPException(status_code=404, detail="Projeto não encontrado")
    return project
