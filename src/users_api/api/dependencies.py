"""
FastAPI dependencies shared by the routes
"""

from fastapi import Request

from users_api.services.users_service import UsersService


def get_users_service(request: Request) -> UsersService:
    """Return the UsersService built during application startup"""
    return request.app.state.users_service
