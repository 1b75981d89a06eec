from datetime import datetime, timedelta

import pytest

from fritter.core.errors import ValidationFailed
from fritter.models.merchant_freet import ListingStatus
from fritter.services import policy

NOW = datetime(2026, 10, 19, 12, 0, 0)


@pytest.mark.parametrize("raw, expected", [(5, 5), ("12", 12), (" 7 ", 7), (2**31 - 1, 2**31 - 1)])
def test_valid_price(raw, expected):
    assert policy.valid_price(raw) == expected


@pytest.mark.parametrize("raw", [0, "0", -3, "abc", "", None, "1.5", True, 2**31, "99999999999999999999"])
def test_invalid_price(raw):
    with pytest.raises(ValidationFailed):
        policy.valid_price(raw)


def test_content_blank_is_400():
    with pytest.raises(ValidationFailed) as exc:
        policy.valid_content("   ")
    assert exc.value.status_code == 400


def test_content_too_long_is_413():
    with pytest.raises(ValidationFailed) as exc:
        policy.valid_content("x" * 141)
    assert exc.value.status_code == 413
    assert policy.valid_content("x" * 140) == "x" * 140


def test_listing_name_limit():
    assert policy.valid_listing_name("n" * 80)
    with pytest.raises(ValidationFailed) as exc:
        policy.valid_listing_name("n" * 81)
    assert exc.value.status_code == 413


@pytest.mark.parametrize("name", ["venmo_user", "abc123"])
def test_valid_payment_username(name):
    assert policy.valid_payment_username(name) == name


@pytest.mark.parametrize("name", ["", None, "has space", "dash-name"])
def test_invalid_payment_username(name):
    with pytest.raises(ValidationFailed):
        policy.valid_payment_username(name)


def test_future_expiration_is_strict():
    assert policy.valid_future_expiration(NOW + timedelta(seconds=1), NOW)
    with pytest.raises(ValidationFailed):
        policy.valid_future_expiration(NOW, NOW)
    with pytest.raises(ValidationFailed):
        policy.valid_future_expiration(None, NOW)


def test_listing_field_parsing():
    assert policy.valid_listing_field("listingPrice", "30", NOW) == 30
    assert policy.valid_listing_field("listingLocation", "  ", NOW) == "none"
    assert policy.valid_listing_field("listingStatus", "deactivated", NOW) == ListingStatus.DEACTIVATED
    exp = policy.valid_listing_field("expiration", "2026-10-21T12:00:00", NOW)
    assert exp == datetime(2026, 10, 21, 12, 0)
    # trailing Z is read as UTC
    exp = policy.valid_listing_field("expiration", "2026-10-21T14:00:00Z", NOW)
    assert exp == datetime(2026, 10, 21, 14, 0)
    with pytest.raises(ValidationFailed):
        policy.valid_listing_field("expiration", "not a date", NOW)
    with pytest.raises(ValidationFailed):
        policy.valid_listing_field("listingStatus", "gone", NOW)
