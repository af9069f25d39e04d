# app/routers/settings.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.account_settings import get_account_settings, save_account_settings
from app.schemas.settings import SettingsPayload, SettingsResponse

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=SettingsResponse)
def read_settings(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return get_account_settings(db, current_user.business_id)


@router.put("", response_model=SettingsResponse)
def update_settings(
    payload: SettingsPayload,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return save_account_settings(db, current_user.business_id, payload)
