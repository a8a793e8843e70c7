"""Account resolution tests.

Learn: Tests cover:
1. Lookup by id and by identity id
2. Claims → account resolution returns the matching account, never another
3. Malformed claims fail with InvalidCredentialError, not UnexpectedError
4. Storage failures surface as UnexpectedError
"""

from unittest.mock import AsyncMock

import pytest

from dietracker.db.storage import Storage, StorageError
from dietracker.errors import InvalidCredentialError, NotFoundError, UnexpectedError
from dietracker.services.account_service import AccountService


@pytest.mark.asyncio
async def test_get_account_by_id(accounts, storage):
    account_id = await storage.save_account(7)

    account = await accounts.get_account_by_id(account_id)
    assert account.id == account_id
    assert account.identity_id == 7
    assert account.daily_limit == 2000


@pytest.mark.asyncio
async def test_get_account_by_id_missing(accounts):
    with pytest.raises(NotFoundError):
        await accounts.get_account_by_id(999)


@pytest.mark.asyncio
async def test_get_account_by_identity_id_missing(accounts):
    with pytest.raises(NotFoundError) as exc:
        await accounts.get_account_by_identity_id(12345)
    assert exc.value.op == "accounts.get_account_by_identity_id"


@pytest.mark.asyncio
async def test_claims_resolve_to_matching_account(accounts, storage, make_claims):
    """Each uid resolves to its own account, never a neighbour's."""
    ids = {uid: await storage.save_account(uid) for uid in (1, 2, 3)}

    for uid, account_id in ids.items():
        account = await accounts.get_account_from_claims(make_claims(uid))
        assert account.identity_id == uid
        assert account.id == account_id


@pytest.mark.asyncio
async def test_claims_with_float_uid(accounts, storage, make_claims):
    await storage.save_account(5)
    account = await accounts.get_account_from_claims(make_claims(5.0))
    assert account.identity_id == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("uid", ["5", None, False, 5.5])
async def test_claims_with_bad_uid(accounts, storage, make_claims, uid):
    await storage.save_account(5)
    with pytest.raises(InvalidCredentialError):
        await accounts.get_account_from_claims(make_claims(uid))


@pytest.mark.asyncio
async def test_claims_without_uid(accounts):
    from dietracker.auth.claims import VerifiedClaims

    with pytest.raises(InvalidCredentialError):
        await accounts.get_account_from_claims(VerifiedClaims({"email": "x@example.com"}))


@pytest.mark.asyncio
async def test_claims_for_identity_without_account(accounts, make_claims):
    """NotFound is propagated unchanged — the caller decides what it means."""
    with pytest.raises(NotFoundError):
        await accounts.get_account_from_claims(make_claims(77))


@pytest.mark.asyncio
async def test_storage_failure_is_unexpected(make_claims):
    broken = AsyncMock(spec=Storage)
    broken.account_by_identity_id.side_effect = StorageError("disk I/O error")

    with pytest.raises(UnexpectedError) as exc:
        await AccountService(broken).get_account_from_claims(make_claims(1))
    assert isinstance(exc.value.__cause__, StorageError)
