"""Perspective validation endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from perspective_ledger.schemas.common import Envelope
from perspective_ledger.schemas.validation import (
    ValidationCreate,
    ValidationOut,
    ValidationStatsOut,
)

from ..dependencies import IdentityDep, LedgerDep

router = APIRouter(prefix="/validate", tags=["validations"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[ValidationOut],
)
async def submit_validation(
    validation_data: ValidationCreate,
    identity: IdentityDep,
    ledger: LedgerDep,
) -> Envelope[ValidationOut]:
    """Record whether the caller finds a perspective fairly represented."""
    validation = ledger.submit_validation(
        validation_data.node_id,
        validation_data.perspective_id,
        identity,
        validation_data.is_represented,
        validation_data.feedback,
    )
    return Envelope(data=ValidationOut.model_validate(validation))


@router.get("/{node_id}/stats", response_model=Envelope[list[ValidationStatsOut]])
async def get_validation_stats(
    node_id: str,
    ledger: LedgerDep,
    version: Annotated[int | None, Query()] = None,
) -> Envelope[list[ValidationStatsOut]]:
    """Return per-perspective validation stats, current version by default."""
    stats = ledger.get_validation_stats(node_id, version)
    return Envelope(data=[ValidationStatsOut.from_stats(item) for item in stats])


@router.get("/{node_id}/mine", response_model=Envelope[ValidationOut])
async def get_my_validation(
    node_id: str,
    perspective_id: Annotated[str, Query(min_length=1, max_length=64)],
    identity: IdentityDep,
    ledger: LedgerDep,
) -> Envelope[ValidationOut]:
    """Return the caller's validation in the node's current version, or null."""
    validation = ledger.get_my_validation(node_id, perspective_id, identity)
    return Envelope(
        data=ValidationOut.model_validate(validation) if validation is not None else None
    )
