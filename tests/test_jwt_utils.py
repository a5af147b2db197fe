import datetime

from session import describe_expiry, parse_jwt_claims
from conftest import make_jwt

NOW = datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)


def at(**delta):
    return make_jwt({"exp": int((NOW + datetime.timedelta(**delta)).timestamp()), "user_id": 1})


def test_parse_claims():
    assert parse_jwt_claims(at(hours=1))["user_id"] == 1


def test_parse_rejects_non_jwt():
    assert parse_jwt_claims("opaque-token") is None
    assert parse_jwt_claims("a.!!!.c") is None
    assert parse_jwt_claims("") is None


def test_describe_hours_and_minutes():
    assert describe_expiry(at(hours=3, minutes=20), now=NOW) == "3h 20m"


def test_describe_minutes_only():
    assert describe_expiry(at(minutes=4, seconds=30), now=NOW) == "4m"


def test_describe_expired():
    assert describe_expiry(at(minutes=-1), now=NOW) == "expired"


def test_describe_without_exp():
    assert describe_expiry(make_jwt({"user_id": 1}), now=NOW) == "unknown"
    assert describe_expiry("opaque-token", now=NOW) == "unknown"
