"""
Logique de tarification pure (pas de Stripe, pas de BD).
Les montants viennent exclusivement des projets relus côté serveur.
"""
import json
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from .errors import UpstreamDataError, ValidationError
from .models import AddonKind, CartItem, LineItem, LineItemKind, Product

DEFAULT_TITLE = "Projeto"

logger = logging.getLogger(__name__)

# module storefront.checkout.pricing
def to_minor_units(amount: Any) -> int:
    """
    Convertit un prix (float|int|str|None) en centimes, arrondi au plus proche (half-up).
    - 650 -> 65000 ; 12.345 -> 1235 ; None/invalide/NaN/infini -> 0
    """
    try:
        value = Decimal(str(amount if amount is not None else 0))
        return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (ArithmeticError, ValueError):
        return 0

def products_by_id(rows: Iterable[Dict[str, Any]]) -> Dict[str, Product]:
    """
    Indexe les lignes 'projects' par id.
    Les lignes sans id sont ignorées.
    Une ligne illisible (prix non numérique, ...) lève UpstreamDataError.
    """
    out: Dict[str, Product] = {}
    for row in rows or []:
        if not row or row.get("id") is None:
            continue
        try:
            product = Product.model_validate(row)
        except PydanticValidationError as e:
            logger.warning("checkout.pricing.products_by_id invalid row id=%s error=%s", row.get("id"), e)
            raise UpstreamDataError("Dados de produto inválidos")
        out[product.id] = product
    return out

def product_line(product: Product) -> LineItem:
    ref = product.code or product.slug
    return LineItem(
        name=product.title or DEFAULT_TITLE,
        unit_amount_minor=to_minor_units(product.price),
        description=f"Código: {ref}" if ref else None,
        product_id=product.id,
        kind=LineItemKind.PRODUCT,
        product_code=product.code,
    )

def addon_lines(product: Product, addon_ids: Iterable[str]) -> List[LineItem]:
    """
    Lignes add-on d'un projet: une par add-on connu et de prix non nul.
    Les identifiants inconnus ou les add-ons non proposés (prix absent/0) sont ignorés.
    """
    lines: List[LineItem] = []
    for addon_id in addon_ids:
        kind = AddonKind.parse(addon_id)
        if kind is None:
            continue
        amount = to_minor_units(product.addon_price(kind))
        if amount <= 0:
            continue
        lines.append(LineItem(
            name=f"{kind.label} - {product.title or DEFAULT_TITLE}",
            unit_amount_minor=amount,
            product_id=product.id,
            kind=LineItemKind.ADDON,
            addon_type=kind,
            product_code=product.code,
        ))
    return lines

def build_line_items(
    items: List[CartItem],
    catalog: Dict[str, Product],
    *,
    strict: bool = False,
) -> Tuple[List[LineItem], List[str]]:
    """
    Construit les lignes tarifées dans l'ordre du panier.
    - Pour chaque article: 1 ligne produit + 0..n lignes add-on.
    - Article dont l'id est inconnu: ignoré (retourné dans missing),
      ou ValidationError si strict=True.
    Retour: (line_items, missing_ids)
    """
    line_items: List[LineItem] = []
    missing: List[str] = []
    for item in items:
        product = catalog.get(item.id)
        if product is None:
            if item.id not in missing:
                missing.append(item.id)
            continue
        line_items.append(product_line(product))
        line_items.extend(addon_lines(product, item.addons))
    if strict and missing:
        raise ValidationError(f"Produtos não encontrados: {', '.join(missing)}")
    return line_items, missing

def make_metadata(items: List[CartItem], user_id: Optional[str] = None) -> Dict[str, str]:
    """
    Métadonnées de session (rattachement commande).
    - user_id: "guest" par défaut (checkout invité)
    - cart: JSON [{id, addons, code}] tronqué à ~4500 chars pour respecter les limites Stripe
    """
    cart_meta = [{"id": it.id, "addons": list(it.addons), "code": it.code} for it in items]
    return {
        "user_id": user_id or "guest",
        "cart": json.dumps(cart_meta, ensure_ascii=False)[:4500],
    }

def redirect_urls(return_url: str) -> Tuple[str, str]:
    """
    URLs de retour post-paiement à partir de returnUrl.
    - succès: ?session_id={CHECKOUT_SESSION_ID} (gabarit résolu par Stripe)
    - annulation: ?canceled=true
    """
    base = return_url.strip()
    sep = "&" if "?" in base else "?"
    return (
        f"{base}{sep}session_id={{CHECKOUT_SESSION_ID}}",
        f"{base}{sep}canceled=true",
    )
