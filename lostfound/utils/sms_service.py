import logging
from functools import lru_cache
from twilio.base.exceptions import TwilioException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from lostfound import errors
from lostfound.config import (
    NOTIFY_TIMEOUT_SECONDS,
    TWILIO_ACCOUNT_SID,
    TWILIO_AUTH_TOKEN,
    TWILIO_FROM_NUMBER,
    TWILIO_NOTIFY_NUMBER,
)
from lostfound.models.item import Item

logger = logging.getLogger(__name__)


def format_item_message(item: Item) -> str:
    details = ", ".join(part for part in (item.color, item.material) if part)
    message = f"{item.post_type.value} item reported: {item.item_type.value}"

    if details:
        message += f" ({details})"

    return f"{message}. Ref {item.id}"


class LogNotifier:
    """Used when no SMS provider is configured: the event is only logged."""

    def item_reported(self, item: Item) -> None:
        logger.info("Item reported (SMS disabled): %s", format_item_message(item))


class SmsNotifier:
    def __init__(self, client: Client, from_number: str, to_number: str):
        self.client = client
        self.from_number = from_number
        self.to_number = to_number

    def item_reported(self, item: Item) -> str:
        try:
            message = self.client.messages.create(
                body=format_item_message(item),
                from_=self.from_number,
                to=self.to_number,
            )
        except (TwilioException, OSError) as e:
            # requests' transport errors are OSError subclasses
            raise errors.UpstreamError(f"SMS dispatch failed: {e}") from e

        logger.info("SMS sent for item %s (sid=%s)", item.id, message.sid)
        return message.sid


def build_sms_notifier() -> SmsNotifier:
    client = Client(
        TWILIO_ACCOUNT_SID,
        TWILIO_AUTH_TOKEN,
        http_client=TwilioHttpClient(timeout=NOTIFY_TIMEOUT_SECONDS),
    )
    return SmsNotifier(client, TWILIO_FROM_NUMBER, TWILIO_NOTIFY_NUMBER)


@lru_cache
def get_notifier():
    if all((TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_FROM_NUMBER, TWILIO_NOTIFY_NUMBER)):
        return build_sms_notifier()

    logger.warning("Twilio is not configured, item notifications will only be logged")
    return LogNotifier()
