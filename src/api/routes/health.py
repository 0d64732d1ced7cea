"""
Health check API route
"""

import logging
from datetime import datetime
from fastapi import APIRouter, HTTPException
from database.connection import get_db_pool
from database.mongo_connection import mongo_connection

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/health")
async def health_check():
    """
    Health check

    Reports unhealthy only when the relational pool is unreachable. The
    document store connects lazily, so its state is reported without
    forcing a connection.
    """
    db_pool = get_db_pool()

    try:
        if db_pool is None:
            raise RuntimeError("Database pool not initialized")

        async with db_pool.acquire() as conn:
            await conn.fetchval("SELECT 1")

        return {
            "status": "healthy",
            "timestamp": datetime.utcnow().isoformat(),
            "backends": {
                "supabase": "connected",
                "mongodb": mongo_connection.state.value
            }
        }

    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")
