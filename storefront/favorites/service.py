from typing import Any, Dict, List

from . import repository

def _ids(user: Dict[str, Any]):
    return user.get("id") or "", user.get("token") or ""

def list_favorites(user: Dict[str, Any]) -> List[str]:
    user_id, token = _ids(user)
    return repository.list_favorite_ids(user_id, token)

def is_favorite(user: Dict[str, Any], project_id: str) -> bool:
    return project_id in list_favorites(user)

def add(user: Dict[str, Any], project_id: str) -> bool:
    """Ajout idempotent (déjà favori -> succès sans écriture)."""
    if is_favorite(user, project_id):
        return True
    user_id, token = _ids(user)
    return repository.add_favorite(user_id, project_id, token)

def remove(user: Dict[str, Any], project_id: str) -> bool:
    user_id, token = _ids(user)
    return repository.remove_favorite(user_id, project_id, token)

def toggle(user: Dict[str, Any], project_id: str) -> bool:
    """
    Bascule l'état favori et retourne le nouvel état.
    Soulève RuntimeError si l'écriture échoue.
    """
    user_id, token = _ids(user)
    if is_favorite(user, project_id):
        if not repository.remove_favorite(user_id, project_id, token):
            raise RuntimeError("remove_favorite failed")
        return False
    if not repository.add_favorite(user_id, project_id, token):
        raise RuntimeError("add_favorite failed")
    return True
