import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.core.fields import parse_row_id, scalar_to_text
from backend.database import get_db, store_error_message
from backend.models.user import User

router = APIRouter(tags=['users'])

logger = logging.getLogger(__name__)


class CreateUserRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    role: str | None = None
    specialization: str | None = None

    @field_validator('*', mode='before')
    @classmethod
    def accept_any_scalar(cls, value):
        return scalar_to_text(value)


class UserResponse(BaseModel):
    id: int
    name: str | None = None
    email: str | None = None
    role: str | None = None
    specialization: str | None = None

    class Config:
        from_attributes = True


class DeleteUserResponse(BaseModel):
    success: bool


@router.get('', response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    try:
        result = await db.execute(select(User).order_by(User.id.asc()))
        return result.scalars().all()
    except SQLAlchemyError as exc:
        logger.warning('Listing users failed: %s', exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=store_error_message(exc),
        ) from exc


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(data: CreateUserRequest | None = None, db: AsyncSession = Depends(get_db)):
    data = data or CreateUserRequest()
    if not data.name or not data.email or not data.role:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Missing fields',
        )

    try:
        user = User(
            name=data.name,
            email=data.email,
            role=data.role,
            specialization=data.specialization or '',
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)

        return user
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning('Creating user %s failed: %s', data.email, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=store_error_message(exc),
        ) from exc


@router.delete('/{user_id}', response_model=DeleteUserResponse)
async def delete_user(user_id: str, db: AsyncSession = Depends(get_db)):
    # No existence check: deleting a missing or malformed id is still a success
    row_id = parse_row_id(user_id)

    try:
        if row_id is not None:
            await db.execute(delete(User).where(User.id == row_id))
            await db.commit()

        return DeleteUserResponse(success=True)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning('Deleting user %s failed: %s', user_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=store_error_message(exc),
        ) from exc
