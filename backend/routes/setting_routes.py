import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.core.fields import scalar_to_text
from backend.database import get_db, store_error_message
from backend.models.setting import Setting

router = APIRouter(tags=['settings'])

logger = logging.getLogger(__name__)


class CreateSettingRequest(BaseModel):
    key: str | None = None
    value: str | None = None

    @field_validator('*', mode='before')
    @classmethod
    def accept_any_scalar(cls, value):
        return scalar_to_text(value)


class SettingResponse(BaseModel):
    id: int
    key: str | None = None
    value: str | None = None

    class Config:
        from_attributes = True


@router.get('', response_model=list[SettingResponse])
async def list_settings(db: AsyncSession = Depends(get_db)):
    try:
        result = await db.execute(select(Setting).order_by(Setting.id.asc()))
        return result.scalars().all()
    except SQLAlchemyError as exc:
        logger.warning('Listing settings failed: %s', exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=store_error_message(exc),
        ) from exc


@router.post('', response_model=SettingResponse, status_code=status.HTTP_201_CREATED)
async def create_setting(data: CreateSettingRequest | None = None, db: AsyncSession = Depends(get_db)):
    data = data or CreateSettingRequest()
    if not data.key:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Missing key',
        )

    try:
        # Append-only, duplicate keys are kept
        setting = Setting(key=data.key, value=data.value or '')
        db.add(setting)
        await db.commit()
        await db.refresh(setting)

        return setting
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning('Creating setting %s failed: %s', data.key, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=store_error_message(exc),
        ) from exc
