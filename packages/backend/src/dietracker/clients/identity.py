"""Identity service client.

Learn: Users never authenticate against this backend directly. Email and
password go to the identity service, which answers with a signed token
and a stable numeric user id. This client:

1. Speaks JSON over HTTP to the identity service (httpx.AsyncClient)
2. Retries transient failures — connection errors, timeouts, 502/503/504
3. Classifies every remote failure into one of four exception classes

Retries live here and nowhere else; callers see a single outcome.
"""

from dataclasses import dataclass
from typing import Optional

import httpx
import structlog

logger = structlog.get_logger()

_RETRY_STATUSES = {502, 503, 504}
_INVALID_ARGUMENT_STATUSES = {400, 422}


class IdentityError(Exception):
    """Base class for identity service failures."""


class IdentityInvalidArgumentError(IdentityError):
    pass


class IdentityUserNotFoundError(IdentityError):
    """Unknown email or wrong password."""


class IdentityUserExistsError(IdentityError):
    pass


class IdentityUnexpectedError(IdentityError):
    pass


@dataclass(frozen=True)
class LoginResult:
    token: str
    identity_id: int


class IdentityClient:
    """Async client for the identity service's login and register calls."""

    def __init__(
        self,
        base_url: str,
        app_id: int,
        *,
        timeout: float = 4.0,
        retries: int = 3,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.app_id = app_id
        self.retries = max(retries, 1)
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def login(self, email: str, password: str) -> LoginResult:
        op = "identity.login"
        resp = await self._post(
            op,
            "/auth/login",
            {"email": email, "password": password, "app_id": self.app_id},
        )

        if resp.status_code in _INVALID_ARGUMENT_STATUSES:
            raise IdentityInvalidArgumentError(f"{op}: {_detail(resp)}")
        if resp.status_code in (401, 404):
            raise IdentityUserNotFoundError(f"{op}: {_detail(resp)}")
        if resp.status_code != 200:
            raise IdentityUnexpectedError(f"{op}: status {resp.status_code}")

        body = _json(op, resp)
        token = body.get("token")
        if not isinstance(token, str) or not token:
            raise IdentityUnexpectedError(f"{op}: response has no token")
        return LoginResult(token=token, identity_id=_user_id(op, body))

    async def register(self, email: str, password: str) -> int:
        op = "identity.register"
        resp = await self._post(
            op, "/auth/register", {"email": email, "password": password}
        )

        if resp.status_code in _INVALID_ARGUMENT_STATUSES:
            raise IdentityInvalidArgumentError(f"{op}: {_detail(resp)}")
        if resp.status_code == 409:
            raise IdentityUserExistsError(f"{op}: {_detail(resp)}")
        if resp.status_code not in (200, 201):
            raise IdentityUnexpectedError(f"{op}: status {resp.status_code}")

        return _user_id(op, _json(op, resp))

    async def _post(self, op: str, path: str, payload: dict) -> httpx.Response:
        """POST with retries. Returns the last response, or raises on transport failure."""
        log = logger.bind(op=op, path=path)
        last_error: Optional[Exception] = None

        for attempt in range(1, self.retries + 1):
            try:
                resp = await self._http.post(path, json=payload)
            except httpx.TransportError as e:
                last_error = e
                log.warning("identity.transport_error", attempt=attempt, error=str(e))
                continue

            if resp.status_code in _RETRY_STATUSES and attempt < self.retries:
                log.warning("identity.retrying", attempt=attempt, status=resp.status_code)
                continue
            return resp

        raise IdentityUnexpectedError(
            f"{op}: identity service unreachable after {self.retries} attempts"
        ) from last_error


def _json(op: str, resp: httpx.Response) -> dict:
    try:
        body = resp.json()
    except ValueError as e:
        raise IdentityUnexpectedError(f"{op}: response is not JSON") from e
    if not isinstance(body, dict):
        raise IdentityUnexpectedError(f"{op}: response is not a JSON object")
    return body


def _user_id(op: str, body: dict) -> int:
    user_id = body.get("user_id")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise IdentityUnexpectedError(f"{op}: response has no integer user_id")
    return user_id


def _detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"status {resp.status_code}"
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return f"status {resp.status_code}"
