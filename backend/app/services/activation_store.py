from datetime import datetime

from sqlalchemy.orm import Session

from app.db.models.provider_setting import ProviderSetting
from app.db.models.user import User

EMAIL_MAPPING_SETTING = "Email Mapping"


def find_by_digest(db: Session, digest: str, provider: str) -> User | None:
    if not digest:
        return None
    return (
        db.query(User)
        .filter(User.activation_digest == digest, User.provider == provider)
        .first()
    )


def stage_activation_digest(user: User, digest: str, sent_at: datetime) -> None:
    """Set the digest fields without committing; the caller decides whether they persist."""
    user.activation_digest = digest
    user.activation_sent_at = sent_at


def mark_verified(db: Session, user_id: int) -> bool:
    """Flip email_verified false -> true in one statement.

    Returns False when another transaction already verified the user. Does not
    commit, so the caller can finish role assignment in the same transaction.
    """
    updated = (
        db.query(User)
        .filter(User.id == user_id, User.email_verified.is_(False))
        .update({User.email_verified: True}, synchronize_session=False)
    )
    return updated == 1


def get_setting_value(db: Session, provider: str, name: str) -> str:
    setting = (
        db.query(ProviderSetting)
        .filter(ProviderSetting.provider == provider, ProviderSetting.name == name)
        .first()
    )
    return setting.value if setting and setting.value else ""


def get_email_mapping(db: Session, provider: str) -> str:
    return get_setting_value(db, provider, EMAIL_MAPPING_SETTING)
