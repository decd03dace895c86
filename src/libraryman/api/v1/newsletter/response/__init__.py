"""Newsletter Response Models."""

from enum import Enum

from pydantic import BaseModel, Field


class SubscriptionOutcome(Enum):
    """Result of a subscribe or unsubscribe call, with its HTTP status."""

    INVALID_EMAIL = ("Invalid email format.", 400)
    ALREADY_SUBSCRIBED = ("Email is already subscribed.", 409)
    SUBSCRIBED = ("You have successfully subscribed!", 201)
    RESUBSCRIBED = ("You have successfully re-subscribed!", 200)
    INVALID_TOKEN = ("Invalid or expired token.", 404)
    ALREADY_UNSUBSCRIBED = ("You are already unsubscribed.", 409)
    UNSUBSCRIBED = ("You have successfully unsubscribed!", 200)

    def __init__(self, message: str, status_code: int):
        self.message = message
        self.status_code = status_code


class NewsletterResponse(BaseModel):
    """
    Response to a subscribe or unsubscribe request.

    Attributes:
        message: Human-readable outcome
        unsubscribe_token: Signed token for the unsubscribe link (subscribe only)
    """

    message: str = Field(..., description="Outcome message")
    unsubscribe_token: str | None = Field(
        None, description="Token for the unsubscribe link"
    )
