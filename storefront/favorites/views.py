from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException

from storefront.utils.security import require_user
from . import service as favorites_service

router = APIRouter(prefix="/api/v1/favorites", tags=["Favorites API"])

@router.get("")
def list_favorites(user: Dict[str, Any] = Depends(require_user)):
    return {"items": favorites_service.list_favorites(user)}

@router.post("/{project_id}")
def add_favorite(project_id: str, user: Dict[str, Any] = Depends(require_user)):
    if not favorites_service.add(user, project_id):
        raise HTTPException(status_code=400, detail="Não foi possível salvar o favorito")
    return {"ok": True, "favorite": True}

@router.delete("/{project_id}")
def remove_favorite(project_id: str, user: Dict[str, Any] = Depends(require_user)):
    if not favorites_service.remove(user, project_id):
        raise HTTPException(status_code=400, detail="Não foi possível remover o favorito")
    return {"ok": True, "favorite": False}

@router.post("/{project_id}/toggle")
def toggle_favorite(project_id: str, user: Dict[str, Any] = Depends(require_user)):
    """Bascule favori/non-favori; retourne le nouvel état."""
    try:
        return {"favorite": favorites_service.toggle(user, project_id)}
    except RuntimeError:
        raise HTTPException(status_code=400, detail="Não foi possível atualizar o favorito")
