"""FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from proposalcraft.api.routes.accounts import router as accounts_router
from proposalcraft.api.routes.chat import router as chat_router
from proposalcraft.api.routes.documents import router as documents_router
from proposalcraft.api.routes.health import router as health_router
from proposalcraft.api.routes.metrics import router as metrics_router
from proposalcraft.api.routes.proposals import router as proposals_router
from proposalcraft.config import get_settings
from proposalcraft.errors import ConflictError, NotFoundError, TurnFailedError
from proposalcraft.utils.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure process-wide logging on startup."""
    configure_logging(get_settings().log_level)
    yield


app = FastAPI(title="ProposalCraft API", version="0.1.0", lifespan=lifespan)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(accounts_router)
app.include_router(documents_router)
app.include_router(proposals_router)
app.include_router(chat_router)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Map NotFoundError to 404."""
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    """Map ConflictError to 409."""
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})


@app.exception_handler(TurnFailedError)
async def turn_failed_handler(request: Request, exc: TurnFailedError) -> JSONResponse:
    """Map TurnFailedError to 503."""
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": exc.message}
    )


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "ProposalCraft API", "version": "0.1.0"}
