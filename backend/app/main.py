import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routes import challenges, players, sessions, updates_ws
from services.matchmaker import matchmaker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    await matchmaker.shutdown()


app = FastAPI(title="RPS Arena API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(players.router, prefix="/api")
app.include_router(challenges.router, prefix="/api")
app.include_router(sessions.router, prefix="/api")
app.include_router(updates_ws.router)
