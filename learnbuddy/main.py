"""Learn Buddy - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from learnbuddy.core.config import get_settings
from learnbuddy.core.errors import LearnBuddyError
from learnbuddy.db.base import Base
from learnbuddy.db.session import engine, AsyncSessionLocal
from learnbuddy.routers import api, patterns
from learnbuddy.services.seeding import seed_games

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        await seed_games(db)

    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Mini-game catalog, subitizing rounds, progress and achievements",
    lifespan=lifespan,
)

app.include_router(api.router)
app.include_router(patterns.router)


@app.exception_handler(LearnBuddyError)
async def domain_error_handler(request: Request, exc: LearnBuddyError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Storage unavailable, please try again"})


@app.get("/health")
async def health():
    return {"status": "ok"}
