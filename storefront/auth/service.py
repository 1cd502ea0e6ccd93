from typing import Optional, Dict, Any
from .repository import (
    get_user_from_access_token as _repo_get_user_from_token,
    get_profile_role as _repo_get_profile_role,
)

STAFF_ROLES = ("master", "partner", "employee")
EDITOR_ROLES = ("master", "partner")
CUSTOMER_ROLE = "customer"

def determine_role(profile_role: Optional[str]) -> str:
    """
    Normalise le rôle issu de 'profiles'.
    Tout ce qui n'est pas un rôle d'équipe devient 'customer'.
    """
    role_lower = str(profile_role or "").strip().lower()
    if role_lower in STAFF_ROLES:
        return role_lower
    return CUSTOMER_ROLE

def is_staff(role: Optional[str]) -> bool:
    return role in STAFF_ROLES

def can_edit_projects(role: Optional[str]) -> bool:
    # master et partner: édition/suppression des projets et styles
    return role in EDITOR_ROLES

def get_user_from_token(access_token: str) -> Dict[str, Any]:
    """Normalise user issu de supabase.auth.get_user(access_token):
    - Retourne {id, email, metadata, role, token}
    - Le rôle vient de la table profiles (fallback 'customer')
    """
    raw = _repo_get_user_from_token(access_token)
    uid = raw.get("id")
    role = determine_role(_repo_get_profile_role(uid)) if uid else CUSTOMER_ROLE
    return {
        "id": uid,
        "email": raw.get("email"),
        "metadata": raw.get("user_metadata") or {},
        "role": role,
        "token": access_token,
    }
