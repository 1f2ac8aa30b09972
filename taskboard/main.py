"""FastAPI application exposing the task board."""
from fastapi import FastAPI

from taskboard import __version__
from taskboard.config import API_BASE_URL, TIMEZONE_NAME
from taskboard.middleware.cors import add_cors_middleware
from taskboard.routers import board_router
from taskboard.routers.board import get_board
from taskboard.utils.logger import get_logger

logger = get_logger("taskboard")

# Create FastAPI application
app = FastAPI(
    title="Task Board API",
    description="Task list, forms and validation in front of a task REST backend",
    version=__version__,
)

# Add CORS middleware
add_cors_middleware(app)


@app.on_event("startup")
async def startup_event():
    """Load the initial task list."""
    logger.info("Starting task board", api_url=API_BASE_URL, timezone=TIMEZONE_NAME)
    board = get_board()
    await board.refresh()
    if board.error:
        logger.warning("Initial task load failed, use /board/refresh to retry", error=board.error)


@app.on_event("shutdown")
async def shutdown_event():
    await get_board().client.aclose()


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "title": "Task Board API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "board": "/board",
    }


app.include_router(board_router)
