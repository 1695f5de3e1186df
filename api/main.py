"""
FastAPI Backend dla renderera HexMerge.

Endpoints:
    GET    /api/health                   - health check
    GET    /api/board?diameter=n         - pola planszy
    GET    /api/keymaps/{name}           - mapa klawiszy
    POST   /api/sessions                 - nowa sesja
    GET    /api/sessions/{id}            - stan sesji
    POST   /api/sessions/{id}/moves      - wykonaj ruch
    DELETE /api/sessions/{id}            - usuń sesję

Sesje żyją tylko w pamięci procesu.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from api.routers import board, sessions


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    print("🚀 HexMerge API starting...")
    yield
    sessions.clear_sessions()
    print("👋 HexMerge API shutting down...")


app = FastAPI(
    title="HexMerge API",
    description="Backend API for the hexagonal 2048 engine",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - allow all origins (including file://)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(board.router, prefix="/api", tags=["Board"])
app.include_router(sessions.router, prefix="/api", tags=["Sessions"])


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}
