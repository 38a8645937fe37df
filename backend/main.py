import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.records_routes import router as records_router
from api.emissions_routes import router as emissions_router
from api.ai_routes import router as ai_router
from api.diagnostics_routes import router as diagnostics_router
from api.reports_routes import router as reports_router
from api.status import router as status_router
from config import get_settings
from core.load_plugins import load_plugins
from services.bootstrap import build_services

logging.basicConfig(
    level=getattr(logging, get_settings().LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_plugins()
    if not hasattr(app.state, "store"):
        build_services(app)
    yield
    sync = getattr(app.state, "sync", None)
    if sync is not None:
        sync.close()
    # next startup wires a fresh store
    if hasattr(app.state, "store"):
        del app.state.store


app = FastAPI(title="EcoVision Emissions Backend", lifespan=lifespan)

# CORS (adjust for your frontend)
origins = os.getenv("CORS_ALLOW_ORIGINS", get_settings().CORS_ALLOW_ORIGINS).split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routes
app.include_router(records_router)
app.include_router(emissions_router)
app.include_router(ai_router)
app.include_router(diagnostics_router)
app.include_router(reports_router)
app.include_router(status_router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
