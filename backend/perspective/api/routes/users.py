"""User Routes — HTTP contract for user CRUD.

Invariants:
    - Path ids, bodies and list query parameters are validated by FastAPI before
      the handler runs; a malformed id is a 422, never a lookup
    - Routes hold no business logic: one service call each
    - X-Range and X-Current-Page are set on every successful listing
    - DELETE answers 204 whether or not the user existed

Design Decisions:
    - UUID path parameter: canonical lowercase form is what reaches the service
    - created is a presence flag: any value (even empty) sorts by createdAt
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from perspective.api.dependencies import get_user_service
from perspective.core.domain_types import DEFAULT_LIMIT, DEFAULT_PAGE, SortField, UserId
from perspective.models.user import User, UserPage
from perspective.schemas.user import UserCreate, UserUpdate
from perspective.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate, service: UserService = Depends(get_user_service),
):
    """Create a user. id and createdAt are assigned server-side."""
    return await service.create_user(body.model_dump())


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: UUID, service: UserService = Depends(get_user_service),
):
    return await service.find_by_id(UserId(str(user_id)))


@router.patch("/{user_id}", response_model=User)
async def update_user(
    user_id: UUID,
    body: UserUpdate | None = None,
    service: UserService = Depends(get_user_service),
):
    """Partial update: only fields present in the body change. No body changes nothing."""
    patch = body.to_patch() if body is not None else {}
    return await service.update_user(UserId(str(user_id)), patch)


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
)
async def delete_user(
    user_id: UUID, service: UserService = Depends(get_user_service),
):
    await service.delete_user(UserId(str(user_id)))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=UserPage)
async def list_users(
    response: Response,
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
    created: str | None = Query(None),
    service: UserService = Depends(get_user_service),
):
    """List users with pagination; ?created sorts ascending by createdAt."""
    sort = SortField.CREATED_AT if created is not None else None
    result = await service.list_users(page, limit, sort)
    response.headers["X-Range"] = f"{result.from_}-{result.to}/{result.total}"
    response.headers["X-Current-Page"] = str(result.page)
    return result
