import os

from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from .errors import register_exception_handlers
from .routes.health import app as health_app
from .routes.plants import app as plants_app
from .routes.collection import app as collection_app

app = FastAPI(title="plantcare")

# Register global exception handlers
register_exception_handlers(app)

# Comma-separated list of allowed frontend origins
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount all routers under /api
api_router = APIRouter(prefix="/api")
api_router.include_router(health_app)
api_router.include_router(plants_app)
api_router.include_router(collection_app)

app.include_router(api_router)


# Top-level health endpoint for container health checks and uptime probes
@app.get("/health")
async def health_root():
    return {"status": "ok"}
