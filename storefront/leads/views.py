import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from storefront.utils.rate_limit import optional_rate_limit
from .models import LeadCreate
from . import service as leads_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/leads", tags=["Leads API"])

@router.post("", status_code=201, dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def create_lead(lead: LeadCreate):
    """
    Capture de lead avant paiement (nom, e-mail, WhatsApp + panier).
    - Public, rate-limité (5 req / 60s)
    - Erreurs: 422 si formulaire invalide, 502 si l'écriture échoue
    """
    row = leads_service.capture_lead(lead)
    if not row:
        raise HTTPException(status_code=502, detail="Não foi possível registrar seus dados")
    logger.info("leads.create source=%s items=%s", lead.source, len(lead.cart_items))
    return JSONResponse({"id": row.get("id"), "status": row.get("status", "new")}, status_code=201)
