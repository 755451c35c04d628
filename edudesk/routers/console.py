# edudesk/routers/console.py
from fastapi import APIRouter, Depends, HTTPException

from edudesk.console.base import ActionRequest, PageResponse
from edudesk.console.router import Console
from edudesk.core.errors import UnknownActionError
from edudesk.core.logging import log
from edudesk.deps.console import get_console

router = APIRouter(prefix="/console", tags=["Console"])

@router.get("", response_model=PageResponse)
async def current_page(console: Console = Depends(get_console)):
    """Render the mounted page"""
    return console.render()

@router.post("/actions", response_model=PageResponse)
async def dispatch_action(body: ActionRequest, console: Console = Depends(get_console)):
    """Apply one UI action to the console and return the re-rendered page"""
    try:
        await console.dispatch(body)
    except UnknownActionError as e:
        log.warning("console_unknown_action", action=e.action, page=e.page)
        raise HTTPException(status_code=400, detail=e.message)
    return console.render()
