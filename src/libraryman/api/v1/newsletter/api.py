"""
Newsletter API endpoints.

Each outcome of subscribe/unsubscribe maps to its own status code, so
clients can tell a repeated request from a malformed one.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from loguru import logger

from libraryman.api.v1.newsletter.response import (
    NewsletterResponse,
    SubscriptionOutcome,
)
from libraryman.di import NewsletterServiceDep
from libraryman.utils.security import create_unsubscribe_token

router = APIRouter()


def _respond(outcome: SubscriptionOutcome, token: str | None = None) -> JSONResponse:
    body = NewsletterResponse(message=outcome.message, unsubscribe_token=token)
    return JSONResponse(
        status_code=outcome.status_code,
        content=body.model_dump(exclude_none=True),
    )


@router.post(
    "/subscribe",
    response_model=NewsletterResponse,
    summary="Subscribe to the newsletter",
    responses={
        201: {"description": "Subscribed"},
        400: {"description": "Invalid email format"},
        409: {"description": "Already subscribed"},
    },
)
async def subscribe(
    service: NewsletterServiceDep,
    email: str = Query(..., description="Subscriber address"),
) -> JSONResponse:
    """Subscribe an email address, or reactivate a cancelled subscription."""
    try:
        outcome = await service.subscribe(email)
    except Exception:
        logger.exception("Subscription failed")
        return JSONResponse(
            status_code=500,
            content={"message": "An error occurred while processing your subscription."},
        )

    token = None
    if outcome in (SubscriptionOutcome.SUBSCRIBED, SubscriptionOutcome.RESUBSCRIBED):
        token = create_unsubscribe_token(email.strip())
    return _respond(outcome, token)


@router.get(
    "/unsubscribe",
    response_model=NewsletterResponse,
    summary="Unsubscribe from the newsletter",
    responses={
        404: {"description": "Invalid or expired token"},
        409: {"description": "Already unsubscribed"},
    },
)
async def unsubscribe(
    service: NewsletterServiceDep,
    token: str = Query(..., description="Token from the unsubscribe link"),
) -> JSONResponse:
    """Cancel the subscription a token was issued for."""
    try:
        outcome = await service.unsubscribe(token)
    except Exception:
        logger.exception("Unsubscription failed")
        return JSONResponse(
            status_code=500,
            content={
                "message": "An error occurred while processing your unsubscription."
            },
        )
    return _respond(outcome)
