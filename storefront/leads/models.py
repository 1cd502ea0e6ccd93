from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

LEAD_STATUSES = ("new", "contacted", "deal", "closed")

class LeadCartItem(BaseModel):
    id: str
    title: Optional[str] = None
    addons: List[str] = Field(default_factory=list)
    code: Optional[str] = None

class LeadCreate(BaseModel):
    name: str
    email: EmailStr
    whatsapp: str
    project_id: Optional[str] = None
    project_title: Optional[str] = None
    message: Optional[str] = None
    source: Optional[str] = "checkout"
    cart_items: List[LeadCartItem] = Field(default_factory=list)

    @field_validator("name", "whatsapp")
    def not_blank(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("campo obrigatório")
        return v

class LeadStatusUpdate(BaseModel):
    status: str

    @field_validator("status")
    def known_status(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if v not in LEAD_STATUSES:
            raise ValueError(f"status inválido (esperado: {', '.join(LEAD_STATUSES)})")
        return v
