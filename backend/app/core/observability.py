import logging

from fastapi import Request

from app.core.api_response import get_request_id


def log_activation_event(
    logger: logging.Logger,
    request: Request,
    *,
    event: str,
    provider: str,
    result: str,
    **fields,
) -> None:
    """Log one activation step as a single ``business_event`` key=value line.

    Raw tokens and digests must never be passed in ``fields``.
    """
    chunks = [
        f"event={event}",
        f"request_id={get_request_id(request)}",
        f"provider={provider}",
        f"result={result}",
    ]
    for key, value in sorted(fields.items()):
        chunks.append(f"{key}={value}")
    logger.info("business_event %s", " ".join(chunks))
