import os
import logging
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.account_activations import router as account_activations_router
from app.core.api_response import error_response_payload, get_request_id
from app.core.errors import ConfigurationError, NotFoundError
from app.core.role_sync import get_role_sync_providers, sync_default_roles
from app.db.session import SessionLocal

logger = logging.getLogger(__name__)
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    providers = get_role_sync_providers()
    if providers:
        db: Session = SessionLocal()
        try:
            result = sync_default_roles(db, providers)
            logger.info(
                "role_sync providers=%s created=%s existing=%s",
                ",".join(providers),
                result.created,
                result.existing,
            )
        finally:
            db.close()

    yield


app = FastAPI(title="Account Activation API", lifespan=lifespan)
app.include_router(account_activations_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or uuid4().hex
    request.state.request_id = request_id
    started_at = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started_at) * 1000
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "http_request request_id=%s method=%s path=%s status=%s duration_ms=%.2f",
        request_id,
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


@app.exception_handler(NotFoundError)
async def not_found_exception_handler(request: Request, exc: NotFoundError):
    logger.info("activation_not_found request_id=%s path=%s", get_request_id(request), request.url.path)
    return JSONResponse(
        status_code=404,
        content=error_response_payload(request, code="not_found", message=exc.message),
    )


@app.exception_handler(ConfigurationError)
async def configuration_exception_handler(request: Request, exc: ConfigurationError):
    logger.error(
        "configuration_error request_id=%s provider=%s role=%s",
        get_request_id(request),
        exc.provider,
        exc.role_name,
    )
    return JSONResponse(
        status_code=500,
        content=error_response_payload(
            request,
            code="configuration_error",
            message="Account activation is misconfigured",
            details=None,
        ),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    detail = exc.detail
    message = detail if isinstance(detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response_payload(
            request,
            code=f"http_{exc.status_code}",
            message=message,
            details=detail,
        ),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content=error_response_payload(
            request,
            code="validation_error",
            message="Validation error",
            details=exc.errors(),
        ),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error request_id=%s", get_request_id(request), exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=error_response_payload(
            request,
            code="internal_error",
            message="Internal server error",
        ),
    )


@app.get("/health")
def health(request: Request):
    return {"ok": True, "status": "ok", "request_id": get_request_id(request)}
