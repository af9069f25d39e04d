# =========================================================
# ACCOUNT SETTINGS HELPER
# Centralized access to the per-account settings document
# =========================================================

from sqlalchemy.orm import Session

from app.models.account_settings import AccountSettings
from app.schemas.settings import SettingsPayload


def _rates(group) -> dict:
    return {name: float(rate) for name, rate in group.model_dump().items()}


def _as_document(payload: SettingsPayload) -> dict:
    return {
        "taxes": _rates(payload.taxes),
        "payment_rates": _rates(payload.payment_rates),
        "platform_fees": _rates(payload.platform_fees),
        "default_profit_margin": payload.default_profit_margin,
        "product_categories": list(payload.product_categories),
    }


def get_account_settings(db: Session, business_id: int) -> AccountSettings:
    account_settings = (
        db.query(AccountSettings)
        .filter(AccountSettings.business_id == business_id)
        .first()
    )

    if account_settings is None:
        account_settings = AccountSettings(
            business_id=business_id,
            **_as_document(SettingsPayload()),
        )
        db.add(account_settings)
        db.commit()
        db.refresh(account_settings)

    return account_settings


def save_account_settings(db: Session, business_id: int, payload: SettingsPayload) -> AccountSettings:
    """Replace the whole document; the last write wins."""
    account_settings = get_account_settings(db, business_id)

    for field, value in _as_document(payload).items():
        setattr(account_settings, field, value)

    db.commit()
    db.refresh(account_settings)

    return account_settings
