import uuid
from unittest.mock import MagicMock
import pytest
from twilio.base.exceptions import TwilioRestException

from lostfound import errors
from lostfound.models.item import Item, ItemType, PostType
from lostfound.utils import sms_service


def make_item(**overrides):
    fields = {
        "post_type": PostType.LOST,
        "item_type": ItemType.WALLET_PURSE,
        "location_id": uuid.uuid4(),
        "account_id": uuid.uuid4(),
    }
    fields.update(overrides)
    return Item(**fields)


def test_format_item_message():
    item = make_item(color="brown", material="leather")

    message = sms_service.format_item_message(item)

    assert message.startswith("Lost item reported: wallet/purse (brown, leather)")
    assert str(item.id) in message


def test_format_item_message_without_details():
    message = sms_service.format_item_message(make_item(post_type=PostType.FOUND, item_type=ItemType.KEYS))

    assert message.startswith("Found item reported: keys.")


def test_sms_notifier_sends_to_configured_number():
    client = MagicMock()
    client.messages.create.return_value.sid = "SM123"
    notifier = sms_service.SmsNotifier(client, "+15550000000", "+15551111111")

    sid = notifier.item_reported(make_item())

    assert sid == "SM123"
    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["from_"] == "+15550000000"
    assert kwargs["to"] == "+15551111111"
    assert "wallet/purse" in kwargs["body"]


@pytest.mark.parametrize("failure", [
    TwilioRestException(500, "/Messages.json", msg="provider down"),
    ConnectionError("connection reset"),
    TimeoutError("timed out"),
])
def test_sms_notifier_wraps_provider_failures(failure):
    client = MagicMock()
    client.messages.create.side_effect = failure
    notifier = sms_service.SmsNotifier(client, "+15550000000", "+15551111111")

    with pytest.raises(errors.UpstreamError):
        notifier.item_reported(make_item())


def test_get_notifier_falls_back_to_logging(monkeypatch):
    monkeypatch.setattr(sms_service, "TWILIO_ACCOUNT_SID", None)
    sms_service.get_notifier.cache_clear()

    try:
        notifier = sms_service.get_notifier()
    finally:
        sms_service.get_notifier.cache_clear()

    assert isinstance(notifier, sms_service.LogNotifier)
    notifier.item_reported(make_item())


def test_get_notifier_builds_twilio_client(monkeypatch):
    monkeypatch.setattr(sms_service, "TWILIO_ACCOUNT_SID", "AC" + "0" * 32)
    monkeypatch.setattr(sms_service, "TWILIO_AUTH_TOKEN", "token")
    monkeypatch.setattr(sms_service, "TWILIO_FROM_NUMBER", "+15550000000")
    monkeypatch.setattr(sms_service, "TWILIO_NOTIFY_NUMBER", "+15551111111")
    sms_service.get_notifier.cache_clear()

    try:
        notifier = sms_service.get_notifier()
    finally:
        sms_service.get_notifier.cache_clear()

    assert isinstance(notifier, sms_service.SmsNotifier)
    assert notifier.to_number == "+15551111111"
