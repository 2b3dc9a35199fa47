from dotenv import load_dotenv
load_dotenv()

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

import config
from routes import contributions, stats
from store import EventStore

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(store: Optional[EventStore] = None) -> FastAPI:
    """
    Build the API around an EventStore.

    The store is opened when the app starts and closed when it stops.
    Without an explicit store, one is created at config.DB_PATH.
    """
    event_store = store if store is not None else EventStore(config.DB_PATH)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        event_store.open()
        logger.info("API: POST/GET /api/contributions, GET /api/stats, GET /api/health")
        yield
        event_store.close()

    app = FastAPI(title="Contribution Graph API", version="0.1.0", lifespan=lifespan)
    app.state.store = event_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def no_cache(request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/api/"):
            # Dashboard switches years often; never serve a stale year
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        return response

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(status_code=400, content={"detail": f"Invalid request: {problems}"})

    app.include_router(contributions.router)
    app.include_router(stats.router)

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    # Dashboard last, so it never shadows /api
    if os.path.isdir(config.STATIC_DIR):
        app.mount("/", StaticFiles(directory=config.STATIC_DIR, html=True), name="dashboard")
        logger.info("Dashboard: serving %s at /", config.STATIC_DIR)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)
