"""
Users CRUD API Server
Five routes over a single users table
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from users_api import __version__
from users_api.database.connection import init_database, close_database
from users_api.services.users_service import UsersService
from users_api.api.routes import users
from users_api.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    db_pool = await init_database()
    app.state.users_service = UsersService(db_pool)
    try:
        yield
    finally:
        await close_database(db_pool)


# FastAPI app initialization
app = FastAPI(
    title="Users API",
    description="CRUD service for the users table",
    version=__version__,
    lifespan=lifespan
)

# Request logging, recovery and error envelopes
setup_error_handling(app)

# Include API routes
app.include_router(users.router, tags=["Users"])

# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
