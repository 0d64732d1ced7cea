"""
Configuration settings for the SQL vs NoSQL Users Demo
"""

import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Relational store (Supabase PostgreSQL)
DATABASE_URL = os.getenv("DATABASE_URL")
USERS_TABLE = os.getenv("USERS_TABLE", "users")

# Document store (MongoDB)
MONGODB_URI = os.getenv("MONGODB_URI")
MONGODB_DB = os.getenv("MONGODB_DB", "tutorial_db")
USERS_COLLECTION = os.getenv("USERS_COLLECTION", "users")

# Mongo client options
MONGODB_MAX_POOL_SIZE = 10
MONGODB_SERVER_SELECTION_TIMEOUT_MS = 5000
MONGODB_SOCKET_TIMEOUT_MS = 45000

PORT = int(os.getenv("PORT", 8080))

# CORS settings
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()]

logger.info(f"Relational table: {USERS_TABLE}, document collection: {MONGODB_DB}.{USERS_COLLECTION}")

# Validate required environment variables
if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is required")
if not MONGODB_URI:
    logger.warning("MONGODB_URI not set - document store requests will fail on first use")
