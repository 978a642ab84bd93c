# Role: FastAPI app bootstrap. Loads environment config early, registers routers, owns the session reaper
# lifecycle (started/stopped by the lifespan), and exposes health/docs endpoints.

from contextlib import asynccontextmanager

from fastapi import FastAPI

import backend.config
backend.config.load_env()

from backend.api.chat import router as chat_router
from backend.api.deps import session_reaper
from backend.api.state import router as state_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    session_reaper.start()
    try:
        yield
    finally:
        session_reaper.stop()


app = FastAPI(title="Ceylon Trails Chat API", version="0.1.0", lifespan=lifespan)
app.include_router(chat_router)
app.include_router(state_router)

@app.get("/")
def root() -> dict:
    # Role: quick discoverability for clients (where are docs/health).
    return {
        "message": "Ceylon Trails Chat API is running",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
