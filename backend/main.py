"""
Scene History Backend - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import config, diff, scenes
from services.checkpoint_store import CheckpointStore
from services.config_manager import ConfigManager


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    # Startup: Initialize singleton services
    print("[Backend] Starting Scene History Backend...")
    config_manager = ConfigManager.get_instance()
    print(f"[Backend] ConfigManager initialized ({config_manager.config_file})")
    CheckpointStore.get_instance()
    print("[Backend] CheckpointStore initialized")

    yield
    # Shutdown: Cleanup
    print("[Backend] Shutting down Scene History Backend...")


app = FastAPI(
    title="Scene History Backend",
    description="Checkpoint history and line diffs for scene text",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for the local editor client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(diff.router, prefix="/api/diff", tags=["diff"])
app.include_router(scenes.router, prefix="/api/scenes", tags=["scenes"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "scene-history-backend"}


if __name__ == "__main__":
    import uvicorn

    server = ConfigManager.get_instance().get_config().get("server", {})
    uvicorn.run(app, host=server.get("host", "0.0.0.0"), port=server.get("port", 8000))
