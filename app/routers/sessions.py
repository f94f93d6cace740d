from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.core.logging import session_context
from app.models.session import AmountIn, CurrencySelectIn, SessionView
from app.services.rates.assets import AssetResolver
from app.services.session import ConversionSession, CurrencyRole
from app.services.session_store import SessionStore

"""Sessions router: JSON adapter over ConversionSession.

Endpoints:
    - POST   /sessions                          -> new session (defaults USD -> PHP)
    - GET    /sessions/{id}                     -> current view
    - DELETE /sessions/{id}                     -> drop session
    - PUT    /sessions/{id}/currencies/{role}   -> select source/target currency
    - PUT    /sessions/{id}/amount              -> set amount (raw text accepted)
    - POST   /sessions/{id}/swap                -> swap source/target
    - POST   /sessions/{id}/convert             -> fetch rate for current pair

Conversion errors propagate to the app-level handler (400 / 502 / 503).
"""

router = APIRouter(prefix="/sessions", tags=["sessions"])


def get_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_assets(request: Request) -> AssetResolver:
    return request.app.state.assets


def load_session(
    session_id: str, store: SessionStore = Depends(get_store)
) -> ConversionSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="session not found")
    return session


@router.post(
    "",
    response_model=SessionView,
    status_code=status.HTTP_201_CREATED,
    summary="Start a conversion session",
)
async def create_session(
    store: SessionStore = Depends(get_store),
    assets: AssetResolver = Depends(get_assets),
):
    session = store.create()
    return SessionView.from_session(session, assets)


@router.get("/{session_id}", response_model=SessionView, summary="Current session view")
async def get_session(
    session: ConversionSession = Depends(load_session),
    assets: AssetResolver = Depends(get_assets),
):
    return SessionView.from_session(session, assets)


@router.delete("/{session_id}", summary="End a conversion session")
async def delete_session(session_id: str, store: SessionStore = Depends(get_store)):
    if not store.delete(session_id):
        raise HTTPException(status_code=404, detail="session not found")
    return {"status": "deleted", "session_id": session_id}


@router.put(
    "/{session_id}/currencies/{role}",
    response_model=SessionView,
    summary="Select source or target currency",
)
async def select_currency(
    role: CurrencyRole,
    payload: CurrencySelectIn,
    session: ConversionSession = Depends(load_session),
    assets: AssetResolver = Depends(get_assets),
):
    with session_context(session.session_id):
        session.select_currency(role, payload.code)
    return SessionView.from_session(session, assets)


@router.put(
    "/{session_id}/amount", response_model=SessionView, summary="Set amount to convert"
)
async def set_amount(
    payload: AmountIn,
    session: ConversionSession = Depends(load_session),
    assets: AssetResolver = Depends(get_assets),
):
    session.set_input_amount(payload.amount)
    return SessionView.from_session(session, assets)


@router.post(
    "/{session_id}/swap", response_model=SessionView, summary="Swap source and target"
)
async def swap(
    session: ConversionSession = Depends(load_session),
    assets: AssetResolver = Depends(get_assets),
):
    session.swap()
    return SessionView.from_session(session, assets)


@router.post(
    "/{session_id}/convert",
    response_model=SessionView,
    summary="Fetch the live rate for the selected pair",
)
async def convert(
    session: ConversionSession = Depends(load_session),
    assets: AssetResolver = Depends(get_assets),
):
    await session.request_rate()
    return SessionView.from_session(session, assets)
