import os
import logging

from fastapi import APIRouter, Depends, Header, Query, Request
from sqlalchemy.orm import Session

from app.core.api_response import flash_redirect_payload, success_response_payload
from app.core.observability import log_activation_event
from app.core.role_sync import DEFAULT_PROVIDER, normalize_provider
from app.core.security import get_optional_session_user
from app.core.utils import send_activation_email
from app.db.models.user import User
from app.db.session import get_db
from app.services.account_activation import (
    ActivationMailer,
    ActivationResult,
    resend_activation,
    verify_activation,
)

router = APIRouter(prefix="/account_activations", tags=["account_activations"])
logger = logging.getLogger(__name__)

SIGNED_IN_REDIRECT_PATH = os.getenv("SIGNED_IN_REDIRECT_PATH", "/home")


def get_provider(x_provider: str | None = Header(default=None)) -> str:
    if x_provider and x_provider.strip():
        return normalize_provider(x_provider)
    return DEFAULT_PROVIDER


def get_activation_mailer() -> ActivationMailer:
    return send_activation_email


def _result_payload(request: Request, result: ActivationResult) -> dict:
    return flash_redirect_payload(
        request,
        outcome=result.outcome,
        flash_type=result.flash_type,
        message=result.message,
        redirect_to=result.redirect_to,
    )


@router.get("")
def show(
    request: Request,
    digest: str | None = Query(default=None),
    provider: str = Depends(get_provider),
    current_user: User | None = Depends(get_optional_session_user),
):
    if current_user is not None:
        log_activation_event(
            logger,
            request,
            event="activation.show",
            provider=provider,
            result="signed_in",
            user_id=current_user.id,
        )
        return success_response_payload(
            request,
            data={"outcome": "signed_in", "redirect_to": SIGNED_IN_REDIRECT_PATH},
        )

    log_activation_event(logger, request, event="activation.show", provider=provider, result="verify")
    return success_response_payload(request, data={"view": "verify", "digest": digest})


@router.get("/edit")
def edit(
    request: Request,
    token: str = Query(..., min_length=1),
    provider: str = Depends(get_provider),
    db: Session = Depends(get_db),
):
    result = verify_activation(db, token, provider)
    log_activation_event(logger, request, event="activation.verify", provider=provider, result=result.outcome)
    return _result_payload(request, result)


@router.get("/resend")
def resend(
    request: Request,
    digest: str = Query(..., min_length=1),
    provider: str = Depends(get_provider),
    db: Session = Depends(get_db),
    send_email: ActivationMailer = Depends(get_activation_mailer),
):
    result = resend_activation(db, digest, provider, send_email)
    log_activation_event(logger, request, event="activation.resend", provider=provider, result=result.outcome)
    return _result_payload(request, result)
