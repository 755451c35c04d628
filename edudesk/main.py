# edudesk/main.py
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from edudesk import __version__
from edudesk.console.router import Console
from edudesk.core.config import settings
from edudesk.core.http import ApiClient
from edudesk.core.logging import log, setup_logging
from edudesk.core.redis import close_redis
from edudesk.routers import console as console_router
from edudesk.state.session import SessionContext, build_session_store


def create_app(console: Optional[Console] = None) -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = console is None
        active = console or Console(ApiClient(), SessionContext(build_session_store()))
        await active.start()
        app.state.console = active
        log.info("console_started", route=active.route, api_base_url=active.http.base_url)
        yield
        if active.page:
            active.page.unmount()
        if owned:
            await active.http.close()
            await close_redis()

    app = FastAPI(title="EduDesk Console Gateway", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_trace(request: Request, call_next):
        trace_id = request.headers.get("X-Trace-Id", str(uuid.uuid4()))
        start = time.time()
        response = await call_next(request)
        took = int((time.time() - start) * 1000)
        log.info("request", path=request.url.path, method=request.method, status=response.status_code,
                 took_ms=took, trace_id=trace_id)
        response.headers["X-Trace-Id"] = trace_id
        return response

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    app.include_router(console_router.router)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host=settings.API_HOST, port=settings.API_PORT)
