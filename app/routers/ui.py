from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.core.logging import session_context
from app.models.session import SessionView
from app.routers.sessions import get_assets, get_store
from app.services.errors import ConversionError
from app.services.rates.assets import AssetResolver
from app.services.session import ConversionSession, CurrencyRole
from app.services.session_store import SessionStore

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

SESSION_COOKIE = "converter_session"


def _current_session(request: Request, store: SessionStore) -> ConversionSession:
    return store.get_or_create(request.cookies.get(SESSION_COOKIE))


def _back_to_page(session: ConversionSession) -> RedirectResponse:
    resp = RedirectResponse(url="/ui", status_code=status.HTTP_303_SEE_OTHER)
    resp.set_cookie(SESSION_COOKIE, session.session_id, httponly=True, samesite="lax")
    return resp


@router.get("/ui", response_class=HTMLResponse)
async def ui_converter(
    request: Request,
    store: SessionStore = Depends(get_store),
    assets: AssetResolver = Depends(get_assets),
):
    session = _current_session(request, store)
    context = {
        "version": request.app.state.settings.version,
        "view": SessionView.from_session(session, assets),
        "currencies": assets.all(),
    }
    resp = templates.TemplateResponse(request, "converter.html", context)
    resp.set_cookie(SESSION_COOKIE, session.session_id, httponly=True, samesite="lax")
    return resp


@router.post("/ui/currency", response_class=RedirectResponse)
async def ui_select_currency(
    request: Request,
    role: CurrencyRole = Form(...),
    code: str = Form(...),
    store: SessionStore = Depends(get_store),
    assets: AssetResolver = Depends(get_assets),
):
    session = _current_session(request, store)
    # unknown codes never come from the page's own selects; ignore them
    if assets.resolve(code) is not None:
        with session_context(session.session_id):
            session.select_currency(role, code)
    return _back_to_page(session)


@router.post("/ui/swap", response_class=RedirectResponse)
async def ui_swap(request: Request, store: SessionStore = Depends(get_store)):
    session = _current_session(request, store)
    session.swap()
    return _back_to_page(session)


@router.post("/ui/amount", response_class=RedirectResponse)
async def ui_set_amount(
    request: Request,
    amount: Optional[str] = Form(None),
    store: SessionStore = Depends(get_store),
):
    """Recompute with the rate already held; no fetch."""
    session = _current_session(request, store)
    session.set_input_amount(amount)
    return _back_to_page(session)


@router.post("/ui/convert", response_class=RedirectResponse)
async def ui_convert(
    request: Request,
    amount: Optional[str] = Form(None),
    store: SessionStore = Depends(get_store),
):
    session = _current_session(request, store)
    session.set_input_amount(amount)
    try:
        await session.request_rate()
    except ConversionError:
        # recorded on session.last_error; the page renders it as the status line
        pass
    return _back_to_page(session)
