"""Domain value types for subscribers.

Raw form input becomes a ``SubscriberName`` / ``SubscriberEmail`` only by
going through ``parse``; everything downstream of the routes works with
these types instead of bare strings.
"""

from app.domain.new_subscriber import NewSubscriber
from app.domain.subscriber_email import SubscriberEmail
from app.domain.subscriber_name import SubscriberName
from app.domain.subscription_status import SubscriptionStatus

__all__ = ["NewSubscriber", "SubscriberEmail", "SubscriberName", "SubscriptionStatus"]
