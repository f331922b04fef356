"""
Database connection and pool management
"""

import asyncpg
import logging
from config.settings import DATABASE_URL, DATABASE_PASSWORD, DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE

logger = logging.getLogger(__name__)

PRODUCTS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS produtos (
    id BIGSERIAL PRIMARY KEY,
    nome TEXT NOT NULL CHECK (length(trim(nome)) > 0),
    preco NUMERIC(10, 2) NOT NULL CHECK (preco > 0),
    descricao TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""

# Global database pool
db_pool = None

async def init_database():
    """Initialize database connection pool and make sure the products table exists"""
    global db_pool
    db_pool = await asyncpg.create_pool(
        DATABASE_URL,
        password=DATABASE_PASSWORD,
        min_size=DB_POOL_MIN_SIZE,
        max_size=DB_POOL_MAX_SIZE,
        command_timeout=60,
        statement_cache_size=0  # pgbouncer compatibility on managed hosts
    )

    async with db_pool.acquire() as conn:
        await conn.execute(PRODUCTS_TABLE_DDL)

    logger.info("Database initialized successfully")


async def close_database():
    """Close database connection pool"""
    global db_pool
    if db_pool:
        await db_pool.close()
        db_pool = None
    logger.info("Database connections closed")

def get_db_pool():
    """Get the database pool instance"""
    return db_pool
