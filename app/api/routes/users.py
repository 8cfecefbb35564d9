from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import ValidationError

from app.api.dependencies import get_user_service
from app.api.schemas.user import UserWrite
from app.core.logger import get_logger
from app.exceptions.exceptions import InvalidBodyException
from app.services.user_service import UserService

logger = get_logger(name="users")

router = APIRouter()


async def read_user_body(request: Request) -> UserWrite:
    """Parse the body as JSON whatever Content-Type the client sent."""
    try:
        return UserWrite.model_validate_json(await request.body())
    except ValidationError as exc:
        logger.warning(f"Invalid request body for {request.url.path}: {exc.errors()}")
        raise InvalidBodyException(exc) from exc


@router.get("/users")
async def list_users(service: UserService = Depends(get_user_service)) -> Response:
    """
    List all users, served from the collection cache when it is warm.
    """
    payload = await service.list_users()
    return Response(content=payload, media_type="application/json")


@router.post("/user", status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserWrite = Depends(read_user_body),
    service: UserService = Depends(get_user_service),
) -> Response:
    """
    Create a new user.
    """
    await service.create_user(user_in.username, user_in.email)
    logger.info(f"Created user {user_in.username}")
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/user/update")
async def update_user(
    user_in: UserWrite = Depends(read_user_body),
    service: UserService = Depends(get_user_service),
) -> Response:
    """
    Update the email of every user with the given username.
    """
    await service.update_user(user_in.username, user_in.email)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/user/delete")
async def delete_user(
    username: str | None = Query(None),
    service: UserService = Depends(get_user_service),
) -> Response:
    """
    Delete every user with the given username. Deleting nobody is not an error.
    """
    await service.delete_user(username)
    return Response(status_code=status.HTTP_200_OK)
