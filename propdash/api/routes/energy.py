"""Shared energy bill routes: groups, calculation, bills, stats and insights."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from propdash.core.database import get_db
from propdash.schemas.energy import (
    ConsumptionStats,
    EnergyBillCreate,
    EnergyBillDraftResponse,
    EnergyBillResponse,
    EnergyGroup,
)
from propdash.services.energy import bills as bill_service
from propdash.services.energy import history
from propdash.services.energy.draft import EnergyBillDraft, UnknownGroupError
from propdash.services.energy.groups import get_energy_groups, get_group
from propdash.services.property import get_linkable_properties

router = APIRouter(prefix="/energy", tags=["energy"])


def _draft_for(db: Session, group_id: str) -> EnergyBillDraft:
    """A fresh draft for a configured group, linked to the stored properties."""
    get_group(group_id)
    return EnergyBillDraft(
        get_energy_groups(),
        properties=get_linkable_properties(db),
        group_id=group_id,
    )


def _save(db: Session, draft: EnergyBillDraft) -> EnergyBillResponse:
    bill_id = draft.save(bill_service.SqlBillStore(db))
    if bill_id is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Energy bill could not be saved",
        )
    return bill_service.bill_to_response(bill_service.get_bill(db, bill_id))


@router.get("/groups", response_model=list[EnergyGroup])
def list_groups() -> list[EnergyGroup]:
    """List the configured energy groups."""
    return get_energy_groups()


@router.get("/groups/{group_id}/draft", response_model=EnergyBillDraftResponse)
def new_draft(
    group_id: str,
    db: Session = Depends(get_db),
) -> EnergyBillDraftResponse:
    """Start a new bill: one zeroed record per group member, with tenant linkage."""
    return _draft_for(db, group_id).to_response()


@router.get("/groups/{group_id}/stats", response_model=ConsumptionStats)
def get_group_stats(
    group_id: str,
    db: Session = Depends(get_db),
) -> ConsumptionStats:
    """Average consumption and value, trend and month-over-month variation."""
    get_group(group_id)
    return history.compute_stats(bill_service.get_bill_history(db, group_id), group_id)


@router.post("/calculate", response_model=EnergyBillDraftResponse)
def calculate(
    data: EnergyBillCreate,
    db: Session = Depends(get_db),
) -> EnergyBillDraftResponse:
    """Recalculate consumption, allocation and validation without saving."""
    draft = _draft_for(db, data.group_id)
    draft.load(data)
    return draft.to_response()


@router.post("/import-previous", response_model=EnergyBillDraftResponse)
def import_previous_month(
    data: EnergyBillCreate,
    db: Session = Depends(get_db),
) -> EnergyBillDraftResponse:
    """Fill previous readings from the group's latest bill."""
    draft = _draft_for(db, data.group_id)
    draft.load(data)
    draft.import_previous_month(bill_service.get_bill_history(db, data.group_id))
    return draft.to_response()


@router.post("/insights", response_model=list[str])
def get_insights(
    data: EnergyBillCreate,
    reference_date: date | None = Query(None, description="Date used for overdue checks"),
    db: Session = Depends(get_db),
) -> list[str]:
    """Insights for a bill being entered, compared against the group history."""
    draft = _draft_for(db, data.group_id)
    draft.load(data)
    return list(draft.insights(bill_service.get_bill_history(db, data.group_id), reference_date))


@router.post(
    "/bills/",
    response_model=EnergyBillResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_bill(
    data: EnergyBillCreate,
    db: Session = Depends(get_db),
) -> EnergyBillResponse:
    """Store a bill. Allocation is recalculated; an invalid total does not block saving."""
    draft = _draft_for(db, data.group_id)
    draft.load(data)
    return _save(db, draft)


@router.get("/bills/", response_model=list[EnergyBillResponse])
def list_bills(
    group_id: str | None = Query(None, description="Only bills of this group"),
    db: Session = Depends(get_db),
) -> list[EnergyBillResponse]:
    """List bills in chronological order."""
    return bill_service.get_bill_history(db, group_id)


@router.get("/bills/{bill_id}", response_model=EnergyBillResponse)
def get_bill(
    bill_id: int,
    db: Session = Depends(get_db),
) -> EnergyBillResponse:
    """Get a bill by ID."""
    return bill_service.bill_to_response(bill_service.get_bill(db, bill_id))


@router.put("/bills/{bill_id}", response_model=EnergyBillResponse)
def update_bill(
    bill_id: int,
    data: EnergyBillCreate,
    db: Session = Depends(get_db),
) -> EnergyBillResponse:
    """Replace a bill's data and recalculate its allocation."""
    stored = bill_service.bill_to_response(bill_service.get_bill(db, bill_id))
    draft = _draft_for(db, data.group_id)
    try:
        draft.edit(stored)
    except UnknownGroupError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    draft.load(data)
    return _save(db, draft)


@router.delete("/bills/{bill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bill(
    bill_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Delete a bill."""
    bill_service.delete_bill(db, bill_id)
