from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError, field_validator

from storefront.utils.security import require_staff, require_editor
from storefront.admin import service as admin_service
from storefront.leads.models import LeadStatusUpdate
from storefront.styles.repository import DuplicateStyleError

# module storefront.admin.views
router = APIRouter(prefix="/admin/api", tags=["Admin"])

class StyleCreate(BaseModel):
    name: str

    @field_validator("name")
    def not_blank(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("nome obrigatório")
        return v

async def _json_body(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except Exception:
        raise HTTPException(status_code=400, detail="JSON inválido")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="JSON inválido")
    return body

# API JSON: stats dashboard (comptes simples)
@router.get("/stats")
def admin_stats(user: dict = Depends(require_staff)):
    return JSONResponse(admin_service.dashboard_stats())

# Leads
@router.get("/leads")
def admin_list_leads(status: Optional[str] = None, limit: int = 200, user: dict = Depends(require_staff)):
    return JSONResponse({"items": admin_service.list_leads(status=status, limit=limit)})

@router.post("/leads/{lead_id}/status")
async def admin_update_lead_status(lead_id: str, request: Request, user: dict = Depends(require_staff)):
    body = await _json_body(request)
    try:
        update = LeadStatusUpdate.model_validate(body)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors()[0].get("msg", "status inválido"))
    updated = admin_service.update_lead_status(user, lead_id, update.status)
    if not updated:
        return JSONResponse({"ok": False}, status_code=400)
    return JSONResponse({"ok": True, "item": updated})

# Projets
@router.get("/projects")
def admin_list_projects(limit: int = 200, user: dict = Depends(require_staff)):
    return JSONResponse({"items": admin_service.list_projects(limit=limit)})

@router.post("/projects")
async def admin_create_project(request: Request, user: dict = Depends(require_editor)):
    body = await _json_body(request)
    if not (body.get("title") or "").strip() or not (body.get("slug") or "").strip():
        raise HTTPException(status_code=400, detail="title e slug obrigatórios")
    created = admin_service.create_project(user, body)
    if not created:
        return JSONResponse({"ok": False}, status_code=400)
    return JSONResponse({"ok": True, "item": created}, status_code=201)

@router.patch("/projects/{project_id}")
async def admin_update_project(project_id: str, request: Request, user: dict = Depends(require_editor)):
    body = await _json_body(request)
    if not admin_service.clean_project_data(body):
        raise HTTPException(status_code=400, detail="nenhum campo editável")
    updated = admin_service.update_project(user, project_id, body)
    if not updated:
        return JSONResponse({"ok": False}, status_code=400)
    return JSONResponse({"ok": True, "item": updated})

@router.delete("/projects/{project_id}")
def admin_delete_project(project_id: str, user: dict = Depends(require_editor)):
    if not admin_service.delete_project(user, project_id):
        return JSONResponse({"ok": False}, status_code=400)
    return JSONResponse({"ok": True})

# Styles
@router.post("/styles")
async def admin_create_style(request: Request, user: dict = Depends(require_editor)):
    body = await _json_body(request)
    try:
        style = StyleCreate.model_validate(body)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Nome do estilo obrigatório")
    try:
        created = admin_service.create_style(user, style.name)
    except DuplicateStyleError:
        raise HTTPException(status_code=409, detail="Este estilo já existe.")
    if not created:
        return JSONResponse({"ok": False}, status_code=400)
    return JSONResponse({"ok": True, "item": created}, status_code=201)

@router.delete("/styles/{style_id}")
def admin_delete_style(style_id: str, user: dict = Depends(require_editor)):
    if not admin_service.delete_style(user, style_id):
        return JSONResponse({"ok": False}, status_code=400)
    return JSONResponse({"ok": True})
