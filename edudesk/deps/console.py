from fastapi import HTTPException, Request

from edudesk.console.router import Console

def get_console(request: Request) -> Console:
    console = getattr(request.app.state, "console", None)
    if console is None:
        raise HTTPException(status_code=503, detail="Console is not started")
    return console
