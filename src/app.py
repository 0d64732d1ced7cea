"""
SQL vs NoSQL Users Demo API Server
Lists, creates and deletes users in a relational store (Supabase/PostgreSQL)
and a document store (MongoDB) through one uniform contract.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from config.settings import ALLOWED_ORIGINS
from database.connection import init_database, close_database
from database.mongo_connection import close_mongo
from api.routes import health
from api.routes.users import build_users_router
from services.users_service import get_supabase_users_service, get_mongodb_users_service
from utils.error_handling import setup_error_handling

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    await init_database()
    yield
    await close_mongo()
    await close_database()

# FastAPI app initialization
app = FastAPI(
    title="SQL vs NoSQL Users Demo",
    description="Side-by-side CRUD over a relational store and a document store",
    version="1.0.0",
    lifespan=lifespan
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Setup centralized error handling
setup_error_handling(app)

# Include API routes
app.include_router(health.router, tags=["Health"])
app.include_router(build_users_router(get_supabase_users_service), prefix="/api/supabase/users", tags=["Supabase (SQL)"])
app.include_router(build_users_router(get_mongodb_users_service), prefix="/api/mongodb/users", tags=["MongoDB (NoSQL)"])

@app.get("/", include_in_schema=False)
async def index():
    """Serve the single-page UI"""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")

# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
