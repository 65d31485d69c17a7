"""FastAPI application - document tagger and wedding planner."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.errors import register_error_handlers
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.tag import router as tag_router
from backend.app.api.routes.wedding import router as wedding_router
from backend.app.config import get_settings
from backend.app.utils.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="AI Utilities API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ui_origin],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register routes
app.include_router(health_router)
app.include_router(tag_router)
app.include_router(wedding_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "AI Utilities API", "version": "0.1.0"}
