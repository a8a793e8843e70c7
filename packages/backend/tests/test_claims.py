"""VerifiedClaims.numeric — the single typed accessor over token claims."""

import pytest

from dietracker.auth.claims import VerifiedClaims
from dietracker.errors import InvalidCredentialError


def test_numeric_int():
    assert VerifiedClaims({"uid": 42}).numeric("uid") == 42


def test_numeric_integral_float():
    """JSON numbers may decode as float; 42.0 is still identity 42."""
    value = VerifiedClaims({"uid": 42.0}).numeric("uid")
    assert value == 42
    assert isinstance(value, int)


@pytest.mark.parametrize("raw", ["42", None, True, 4.5, [42], {"id": 42}])
def test_numeric_rejects_wrong_shape(raw):
    with pytest.raises(InvalidCredentialError):
        VerifiedClaims({"uid": raw}).numeric("uid")


def test_numeric_missing_claim():
    with pytest.raises(InvalidCredentialError) as exc:
        VerifiedClaims({"email": "a@example.com"}).numeric("uid")
    assert "missing uid claim" in str(exc.value)


def test_claims_are_a_read_only_mapping():
    claims = VerifiedClaims({"uid": 1, "email": "a@example.com"})
    assert dict(claims) == {"uid": 1, "email": "a@example.com"}
    assert len(claims) == 2
    with pytest.raises(TypeError):
        claims["uid"] = 2
