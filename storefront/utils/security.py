from fastapi import Request, HTTPException, Depends
from typing import Dict, Any

from storefront.auth import service as auth_service

COOKIE_NAME = "sb_access"

def get_current_user(request: Request) -> Dict[str, Any]:
    # Hybride: priorité au Bearer, fallback cookie
    token = None
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
    if not token:
        token = request.cookies.get(COOKIE_NAME)

    if not token:
        raise HTTPException(status_code=401, detail="Não autenticado")

    try:
        user = auth_service.get_user_from_token(token)
        if not user.get("id"):
            raise HTTPException(status_code=401, detail="Sessão expirada, faça login novamente")
        return user
    except HTTPException:
        raise
    except Exception:
        raise HTTPException(status_code=401, detail="Sessão expirada, faça login novamente")

def require_user(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return user

def require_staff(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if not auth_service.is_staff(user.get("role")):
        raise HTTPException(status_code=403, detail="Acesso negado")
    return user

def require_editor(user: Dict[str, Any] = Depends(require_staff)) -> Dict[str, Any]:
    if not auth_service.can_edit_projects(user.get("role")):
        raise HTTPException(status_code=403, detail="Permissão insuficiente")
    return user
