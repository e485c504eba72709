import uuid
import pytest

from lostfound import errors
from lostfound.models.item import ItemType, PostType
from lostfound.utils.form_validator import parse_item_id, validate_create_admin_form, validate_create_item_form


def test_admin_form_coerces_numeric_phone_number():
    form = validate_create_admin_form({
        "username": "alice01",
        "password": "secret",
        "email": "alice@example.com",
        "phoneNumber": 5551234,
    })

    assert form.phone_number == "5551234"
    assert form.first_name is None


def test_admin_form_strips_username_but_not_password():
    form = validate_create_admin_form({
        "username": "  alice01 ",
        "password": " secret ",
        "email": "alice@example.com",
    })

    assert form.username == "alice01"
    assert form.password == " secret "


def test_admin_form_accepts_whitespace_password():
    form = validate_create_admin_form({
        "username": "alice01",
        "password": " ",
        "email": " alice@example.com ",
    })

    assert form.password == " "
    assert form.email == "alice@example.com"


def test_admin_form_lists_every_missing_field():
    with pytest.raises(errors.ValidationError) as exc_info:
        validate_create_admin_form({"firstName": "Alice"})

    detail = exc_info.value.detail
    assert "username is required" in detail
    assert "password is required" in detail
    assert "email is required" in detail


def test_admin_form_rejects_non_object():
    with pytest.raises(errors.ValidationError):
        validate_create_admin_form(None)


def test_item_form_parses_enumerations():
    form = validate_create_item_form({
        "postType": "Found",
        "itemType": "glasses/sunglasses",
        "locationId": str(uuid.uuid4()),
        "accountId": str(uuid.uuid4()),
        "imageFileName": "items/glasses-1.webp",
    })

    assert form.post_type is PostType.FOUND
    assert form.item_type is ItemType.GLASSES_SUNGLASSES
    assert form.image_file_name == "items/glasses-1.webp"


def test_parse_item_id():
    item_id = uuid.uuid4()

    assert parse_item_id(str(item_id)) == item_id

    with pytest.raises(errors.ValidationError):
        parse_item_id("abc")
