from app.db.models.subscription import Subscription, SubscriptionToken

__all__ = ["Subscription", "SubscriptionToken"]
