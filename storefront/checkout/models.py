"""
Structures typées du checkout (validées à la frontière HTTP).
- CartItem / CheckoutRequest: entrée client (jamais persistée)
- Product: projet de référence lu dans la table 'projects'
- LineItem / CheckoutSessionRequest: sortie vers le prestataire de paiement
"""
import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PRODUCT_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]{0,63}$")


class AddonKind(str, Enum):
    ELECTRICAL = "electrical"
    HYDRAULIC = "hydraulic"
    SANITARY = "sanitary"
    STRUCTURAL = "structural"

    @classmethod
    def parse(cls, value: str) -> Optional["AddonKind"]:
        """Correspondance exacte ('electrical', ...); toute autre valeur -> None."""
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def price_field(self) -> str:
        return f"price_{self.value}"

    @property
    def label(self) -> str:
        return ADDON_LABELS[self]


ADDON_LABELS = {
    AddonKind.ELECTRICAL: "Projeto Elétrico",
    AddonKind.HYDRAULIC: "Projeto Hidráulico",
    AddonKind.SANITARY: "Projeto Sanitário",
    AddonKind.STRUCTURAL: "Projeto Estrutural",
}


class LineItemKind(str, Enum):
    PRODUCT = "product"
    ADDON = "addon"


class CartItem(BaseModel):
    id: str
    addons: List[str] = Field(default_factory=list)
    code: Optional[str] = None

    @field_validator("id")
    def product_id_syntax(cls, v: str) -> str:
        v = (v or "").strip()
        if not PRODUCT_ID_PATTERN.match(v):
            raise ValueError("identificador de produto inválido")
        return v

    @field_validator("addons", mode="before")
    def addons_as_set(cls, v: Any) -> List[str]:
        # Sémantique d'ensemble: doublons retirés, ordre de première apparition conservé
        if v is None:
            return []
        if not isinstance(v, (list, tuple, set)):
            raise ValueError("addons deve ser uma lista")
        seen: List[str] = []
        for a in v:
            a = str(a)
            if a and a not in seen:
                seen.append(a)
        return seen


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: List[CartItem] = Field(min_length=1)
    customer_email: Optional[str] = Field(default=None, alias="customerEmail")
    return_url: str = Field(alias="returnUrl", min_length=1)

    @field_validator("customer_email")
    def blank_email_is_none(cls, v: Optional[str]) -> Optional[str]:
        v = (v or "").strip()
        return v or None

    def product_ids(self) -> List[str]:
        """Identifiants distincts, dans l'ordre du panier."""
        ids: List[str] = []
        for it in self.items:
            if it.id not in ids:
                ids.append(it.id)
        return ids


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: Optional[str] = None
    slug: Optional[str] = None
    code: Optional[str] = None
    price: Optional[float] = None
    price_electrical: Optional[float] = None
    price_hydraulic: Optional[float] = None
    price_sanitary: Optional[float] = None
    price_structural: Optional[float] = None

    @field_validator("id", mode="before")
    def id_as_str(cls, v: Any) -> str:
        return str(v)

    def addon_price(self, kind: AddonKind) -> float:
        return float(getattr(self, kind.price_field) or 0)


class LineItem(BaseModel):
    name: str
    unit_amount_minor: int
    quantity: int = 1
    description: Optional[str] = None
    product_id: str
    kind: LineItemKind
    addon_type: Optional[AddonKind] = None
    product_code: Optional[str] = None

    def metadata(self) -> Dict[str, str]:
        meta = {"project_id": self.product_id, "type": "project" if self.kind is LineItemKind.PRODUCT else "addon"}
        if self.addon_type:
            meta["addon_type"] = self.addon_type.value
        if self.product_code:
            meta["project_code"] = self.product_code
        return meta


class CheckoutSessionRequest(BaseModel):
    line_items: List[LineItem]
    success_url: str
    cancel_url: str
    currency: str
    payment_method_types: List[str]
    mode: str = "payment"
    customer_email: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    def total_minor(self) -> int:
        return sum(li.unit_amount_minor * li.quantity for li in self.line_items)


class CheckoutResponse(BaseModel):
    url: str


class QuoteResponse(BaseModel):
    line_items: List[Dict[str, Any]]
    total_minor: int
    currency: str
