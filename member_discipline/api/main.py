"""FastAPI application entry point for the member discipline service."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from member_discipline import __version__
from member_discipline.api.middleware.logging_middleware import LoggingMiddleware
from member_discipline.api.routes.member_actions import router as member_actions_router
from member_discipline.api.startup import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    yield


app = FastAPI(
    title="Member Discipline API",
    description="Notifications, warnings, bans and reactivations of members",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
app.include_router(member_actions_router)
