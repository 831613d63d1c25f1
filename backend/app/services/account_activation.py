import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Literal
from urllib.parse import urlencode

from sqlalchemy.orm import Session

from app.core.errors import ConfigurationError, NotFoundError
from app.core.rate_limit import check_rate_limit, record_attempt
from app.core.role_mapping import resolve_role
from app.core.security import generate_activation_token, hash_activation_token
from app.db.models.role import PENDING_ROLE_NAME
from app.db.models.user import User
from app.services.activation_store import (
    find_by_digest,
    get_email_mapping,
    mark_verified,
    stage_activation_digest,
)

logger = logging.getLogger(__name__)

APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:8000").rstrip("/")
ACTIVATION_RESEND_LIMIT = int(os.getenv("ACTIVATION_RESEND_LIMIT", "3"))
ACTIVATION_RESEND_WINDOW_MINUTES = int(os.getenv("ACTIVATION_RESEND_WINDOW_MINUTES", "60"))

SIGNIN_PATH = "/signin"
ROOT_PATH = "/"

ActivationOutcome = Literal[
    "activated",
    "pending_approval",
    "already_verified",
    "resend_success",
    "resend_not_sent",
]
FlashType = Literal["success", "alert"]
ActivationMailer = Callable[[str, str], bool]


@dataclass(frozen=True)
class ActivationResult:
    outcome: ActivationOutcome
    flash_type: FlashType
    message: str
    redirect_to: str


ACTIVATED = ActivationResult(
    outcome="activated",
    flash_type="success",
    message="Your account has been verified. Sign in to continue.",
    redirect_to=SIGNIN_PATH,
)
PENDING_APPROVAL = ActivationResult(
    outcome="pending_approval",
    flash_type="success",
    message="Your email has been verified. An administrator must approve your account before you can sign in.",
    redirect_to=ROOT_PATH,
)
ALREADY_VERIFIED = ActivationResult(
    outcome="already_verified",
    flash_type="alert",
    message="This account has already been verified.",
    redirect_to=ROOT_PATH,
)
RESEND_SUCCESS = ActivationResult(
    outcome="resend_success",
    flash_type="success",
    message="A new activation email has been sent to your address.",
    redirect_to=ROOT_PATH,
)
RESEND_NOT_SENT = ActivationResult(
    outcome="resend_not_sent",
    flash_type="alert",
    message="The activation email could not be sent. Please try again later.",
    redirect_to=ROOT_PATH,
)


def _utc_now_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def build_activation_url(token: str) -> str:
    return f"{APP_BASE_URL}/account_activations/edit?{urlencode({'token': token})}"


def issue_activation(db: Session, user: User, send_email: ActivationMailer) -> str | None:
    """Issue a fresh activation token for user and mail the link.

    Only the digest is stored; the returned raw token is never persisted.
    The new digest is committed only once the mailer accepted the message.
    Otherwise the previous digest stays in place, so links already sent keep
    working, and None is returned.
    """
    token = generate_activation_token()
    stage_activation_digest(user, hash_activation_token(token), _utc_now_naive())

    try:
        sent = send_email(user.email, build_activation_url(token))
    except Exception:
        db.rollback()
        raise

    if not sent:
        db.rollback()
        logger.warning("Activation email not sent user_id=%s provider=%s", user.id, user.provider)
        return None

    db.commit()
    return token


def _is_pending(user: User) -> bool:
    return user.role is not None and user.role.name == PENDING_ROLE_NAME


def verify_activation(db: Session, raw_token: str, provider: str) -> ActivationResult:
    user = find_by_digest(db, hash_activation_token(raw_token), provider)
    if user is None:
        raise NotFoundError()

    if user.email_verified:
        return ALREADY_VERIFIED

    if not mark_verified(db, user.id):
        # Lost the race against a concurrent verification of the same link.
        db.rollback()
        return ALREADY_VERIFIED

    if _is_pending(user):
        db.commit()
        return PENDING_APPROVAL

    try:
        role = resolve_role(db, get_email_mapping(db, provider), user.email, user.role, provider)
    except ConfigurationError:
        db.rollback()
        raise

    if user.role is None:
        user.role = role
    db.commit()
    return ACTIVATED


def resend_activation(
    db: Session,
    digest: str,
    provider: str,
    send_email: ActivationMailer,
) -> ActivationResult:
    user = find_by_digest(db, digest, provider)
    if user is None:
        raise NotFoundError()

    if user.email_verified:
        return ALREADY_VERIFIED

    check_rate_limit(
        db,
        provider,
        user.email,
        "activation_resend",
        limit=ACTIVATION_RESEND_LIMIT,
        window_minutes=ACTIVATION_RESEND_WINDOW_MINUTES,
    )
    email = user.email
    if issue_activation(db, user, send_email) is None:
        return RESEND_NOT_SENT

    record_attempt(db, provider, email, "activation_resend")
    return RESEND_SUCCESS
