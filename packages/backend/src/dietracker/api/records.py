"""Record API — list, create, get, and delete the caller's intake entries.

Learn: All routes need a bearer token. The service resolves the caller's
account from the token claims, so no route takes an account id.
"""

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Response

from dietracker.api.deps import get_record_service, http_error
from dietracker.auth.claims import VerifiedClaims
from dietracker.auth.dependencies import get_claims
from dietracker.db.models import MAX_INTEGER
from dietracker.errors import ServiceError
from dietracker.schemas.record import RecordCreate, RecordCreated, RecordRead
from dietracker.services.record_service import RecordService

router = APIRouter(prefix="/records")


@router.get("", response_model=list[RecordRead])
async def list_records(
    day: Optional[date] = Query(None, alias="date", description="YYYY-MM-DD, defaults to today (UTC)"),
    claims: VerifiedClaims = Depends(get_claims),
    svc: RecordService = Depends(get_record_service),
):
    if day is None:
        day = datetime.now(timezone.utc).date()
    try:
        return await svc.list_records_for_caller(claims, day)
    except ServiceError as e:
        raise http_error(e)


@router.post("", response_model=RecordCreated, status_code=201)
async def create_record(
    body: RecordCreate,
    claims: VerifiedClaims = Depends(get_claims),
    svc: RecordService = Depends(get_record_service),
):
    try:
        record_id = await svc.create_record_for_caller(claims, body.date_record, body.value)
    except ServiceError as e:
        raise http_error(e)
    return RecordCreated(id=record_id)


@router.get("/{record_id}", response_model=RecordRead)
async def get_record(
    record_id: int = Path(..., ge=1, le=MAX_INTEGER),
    claims: VerifiedClaims = Depends(get_claims),
    svc: RecordService = Depends(get_record_service),
):
    try:
        return await svc.get_record_for_caller(claims, record_id)
    except ServiceError as e:
        raise http_error(e)


@router.delete("/{record_id}", status_code=204)
async def delete_record(
    record_id: int = Path(..., ge=1, le=MAX_INTEGER),
    claims: VerifiedClaims = Depends(get_claims),
    svc: RecordService = Depends(get_record_service),
):
    try:
        await svc.delete_record_for_caller(claims, record_id)
    except ServiceError as e:
        raise http_error(e)
    return Response(status_code=204)
