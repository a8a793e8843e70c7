"""Verified claims — the request-scoped view of a validated token."""

from collections.abc import Mapping
from typing import Any, Iterator

from dietracker.errors import InvalidCredentialError


class VerifiedClaims(Mapping):
    """Read-only mapping over a verified token payload.

    Values stay loosely typed; numeric() is the one typed accessor the
    services use, so shape checks are not scattered around.
    """

    def __init__(self, data: Mapping[str, Any]):
        self._data = dict(data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"VerifiedClaims({self._data!r})"

    def numeric(self, name: str) -> int:
        """Return claim `name` as an int.

        JSON numbers may decode as float; integral floats are accepted.
        Missing, bool, string, or fractional values raise InvalidCredentialError.
        """
        op = "claims.numeric"
        if name not in self._data:
            raise InvalidCredentialError(f"missing {name} claim", op=op)

        value = self._data[name]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidCredentialError(f"{name} claim is not numeric", op=op)
        if isinstance(value, float):
            if not value.is_integer():
                raise InvalidCredentialError(f"{name} claim is not an integer", op=op)
            value = int(value)
        return value
