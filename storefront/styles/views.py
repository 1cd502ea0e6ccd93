from fastapi import APIRouter

from . import repository as styles_repository

router = APIRouter(prefix="/api/v1/styles", tags=["Styles API"])

@router.get("")
def list_styles():
    return {"items": styles_repository.list_styles()}
