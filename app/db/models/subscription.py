import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid

from app.db.base import Base
from app.domain import SubscriptionStatus


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(320), unique=True, nullable=False, index=True)
    name = Column(Text, nullable=False)
    subscribed_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    status = Column(
        String(32),
        nullable=False,
        default=SubscriptionStatus.PENDING_CONFIRMATION.value,
    )


class SubscriptionToken(Base):
    __tablename__ = "subscription_tokens"

    subscription_token = Column(String, primary_key=True)
    subscriber_id = Column(Uuid, ForeignKey("subscriptions.id"), nullable=False, index=True)
