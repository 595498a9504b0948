from dataclasses import dataclass

from app.domain.subscriber_email import SubscriberEmail
from app.domain.subscriber_name import SubscriberName


@dataclass(frozen=True, slots=True)
class NewSubscriber:
    email: SubscriberEmail
    name: SubscriberName
