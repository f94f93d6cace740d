from typing import List

from fastapi import APIRouter, Depends

from app.models.session import CurrencyOut
from app.routers.sessions import get_assets
from app.services.rates.assets import AssetResolver

router = APIRouter(prefix="/currencies", tags=["currencies"])


@router.get("", response_model=List[CurrencyOut], summary="Selectable currencies")
async def list_currencies(assets: AssetResolver = Depends(get_assets)):
    return [
        CurrencyOut(code=a.code, name=a.name, flag=a.flag, flag_url=a.flag_url)
        for a in assets.all()
    ]
