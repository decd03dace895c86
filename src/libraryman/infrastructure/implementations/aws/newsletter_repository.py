"""AWS DynamoDB implementation for newsletter subscriptions using PynamoDB."""

from pynamodb.attributes import BooleanAttribute, UnicodeAttribute, UTCDateTimeAttribute
from pynamodb.exceptions import DoesNotExist, PynamoDBException
from pynamodb.models import Model

from libraryman.core.logging import logger
from libraryman.domain.exceptions import UnexpectedFailureError
from libraryman.infrastructure.repositories.newsletter_repository import (
    NewsletterRepository,
    NewsletterSubscription,
)


class SubscriptionModel(Model):
    """PynamoDB model keyed by lowercase subscriber email."""

    class Meta:
        table_name = None
        region = None

    email = UnicodeAttribute(hash_key=True)
    active = BooleanAttribute(default=True)
    subscribed_at = UTCDateTimeAttribute()
    unsubscribed_at = UTCDateTimeAttribute(null=True)


class AWSNewsletterRepository(NewsletterRepository):
    """AWS DynamoDB implementation of NewsletterRepository."""

    def __init__(
        self,
        table_name: str = "libraryman-newsletter",
        region_name: str = "eu-west-1",
        auto_create_table: bool = False,
    ):
        if not table_name:
            raise ValueError("table_name cannot be empty")

        SubscriptionModel.Meta.table_name = table_name
        SubscriptionModel.Meta.region = region_name

        if auto_create_table and not SubscriptionModel.exists():
            logger.info(f"Creating DynamoDB table: {table_name}")
            SubscriptionModel.create_table(
                read_capacity_units=1, write_capacity_units=1, wait=True
            )

        logger.info(f"Initialized AWSNewsletterRepository with table={table_name}")

    async def find_by_email(self, email: str) -> NewsletterSubscription | None:
        """Get a subscription by partition key."""
        try:
            model = SubscriptionModel.get(hash_key=email.lower())
        except DoesNotExist:
            return None
        except PynamoDBException as e:
            logger.error(f"Failed to get subscription: {e}")
            raise UnexpectedFailureError("Newsletter store is unavailable") from e

        return NewsletterSubscription(
            email=model.email,
            active=model.active,
            subscribed_at=model.subscribed_at,
            unsubscribed_at=model.unsubscribed_at,
        )

    async def save(self, subscription: NewsletterSubscription) -> None:
        """Put the subscription item."""
        try:
            SubscriptionModel(
                email=subscription.email.lower(),
                active=subscription.active,
                subscribed_at=subscription.subscribed_at,
                unsubscribed_at=subscription.unsubscribed_at,
            ).save()
        except PynamoDBException as e:
            logger.error(f"Failed to save subscription: {e}")
            raise UnexpectedFailureError("Newsletter store is unavailable") from e
