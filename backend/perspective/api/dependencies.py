"""Route Dependencies — resolve collaborators the app factory attached to app.state.

Invariants:
    - Routes never construct services; they receive the instance built at startup
"""

from fastapi import Request

from perspective.infrastructure.database import MongoDatabase
from perspective.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_database(request: Request) -> MongoDatabase | None:
    return request.app.state.database
