"""
server.py -- FastAPI application entry point.

Mounts all API routes under /api/. The translation table is loaded once at
startup from Config.from_env() (CSV_LOCALIZE_* variables).
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from csv_localize.config import Config
from web.routes import translations, table, health
from web.service import startup_load


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup_load(Config.from_env())
    yield


app = FastAPI(title="CSV Localize", docs_url="/api/docs", openapi_url="/api/openapi.json",
              lifespan=lifespan)

# Front-ends in development fetch strings cross-origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Mount API routes
app.include_router(translations.router, prefix="/api")
app.include_router(table.router, prefix="/api")
app.include_router(health.router, prefix="/api")
