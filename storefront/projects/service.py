"""
Catalogue: filtres terrain/quartos/estilo et packages achetables d'un projet.
"""
from typing import Any, Dict, List, Optional

from storefront.checkout.models import AddonKind
from storefront.checkout.pricing import to_minor_units
from . import repository

ARCHITECTURAL = "architectural"

def _as_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None

def matches_filters(
    project: Dict[str, Any],
    *,
    width: Optional[float] = None,
    depth: Optional[float] = None,
    bedrooms: Optional[int] = None,
    style: Optional[str] = None,
) -> bool:
    """
    Un projet convient si:
    - sa largeur/profondeur tiennent dans le terrain (<=)
    - le nombre de chambres est exact
    - le style est exact
    Les filtres non renseignés ne s'appliquent pas.
    """
    if width is not None:
        w = _as_float(project.get("width_meters"))
        if w is None or w > width:
            return False
    if depth is not None:
        d = _as_float(project.get("depth_meters"))
        if d is None or d > depth:
            return False
    if bedrooms is not None and project.get("bedrooms") != bedrooms:
        return False
    if style and project.get("style") != style:
        return False
    return True

def search_projects(
    width: Optional[float] = None,
    depth: Optional[float] = None,
    bedrooms: Optional[int] = None,
    style: Optional[str] = None,
) -> List[Dict[str, Any]]:
    projects = repository.list_published_projects()
    return [
        p for p in projects
        if matches_filters(p, width=width, depth=depth, bedrooms=bedrooms, style=style)
    ]

def get_project_page(slug: str) -> Optional[Dict[str, Any]]:
    """Projet par slug; incrémente le compteur de vues si trouvé."""
    project = repository.get_project_by_slug(slug)
    if project:
        repository.increment_view(slug)
    return project

def available_packages(project: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Packages achetables: projet architectural (toujours) + add-ons de prix non nul.
    Montants en reais et en centimes.
    """
    packages = [{
        "id": ARCHITECTURAL,
        "label": "Projeto Arquitetônico",
        "price": _as_float(project.get("price")) or 0.0,
        "unit_amount_minor": to_minor_units(project.get("price")),
    }]
    for kind in AddonKind:
        amount = to_minor_units(project.get(kind.price_field))
        if amount <= 0:
            continue
        packages.append({
            "id": kind.value,
            "label": kind.label,
            "price": _as_float(project.get(kind.price_field)),
            "unit_amount_minor": amount,
        })
    return packages

def lookup_projects(ids: List[str]) -> List[Dict[str, Any]]:
    """Lignes normalisées {id, title, slug, code, price} pour hydrater le panier."""
    rows = repository.fetch_projects_by_ids(ids)
    return [
        {
            "id": str(p.get("id") or ""),
            "title": p.get("title") or "",
            "slug": p.get("slug") or "",
            "code": p.get("code"),
            "price": _as_float(p.get("price")) or 0.0,
        }
        for p in rows
        if p.get("id")
    ]
