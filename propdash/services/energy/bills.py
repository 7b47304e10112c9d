"""Energy bill storage backed by SQLAlchemy."""

import logging
from typing import Protocol

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from propdash.models.energy_bill import EnergyBill, EnergyBillProperty
from propdash.schemas.energy import (
    EnergyBillBase,
    EnergyBillResponse,
    SharedPropertyConsumption,
)

logger = logging.getLogger(__name__)


class BillStore(Protocol):
    """Persistence boundary for finished bills.

    Failures are reported as ``None``/``False`` rather than raised.
    """

    def add(self, bill: EnergyBillBase) -> int | None: ...

    def update(self, bill_id: int, bill: EnergyBillBase) -> bool: ...


class SqlBillStore:
    """BillStore writing to the application database."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, bill: EnergyBillBase) -> int | None:
        """Create a bill, returning its new id."""
        db_bill = EnergyBill()
        _apply(db_bill, bill)
        self.db.add(db_bill)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Could not create energy bill for group %s", bill.group_id)
            return None

        self.db.refresh(db_bill)
        logger.info("Created energy bill %s for group %s", db_bill.id, db_bill.group_id)
        return db_bill.id

    def update(self, bill_id: int, bill: EnergyBillBase) -> bool:
        """Replace a stored bill's data."""
        db_bill = self.db.query(EnergyBill).filter(EnergyBill.id == bill_id).first()
        if not db_bill:
            logger.warning("Energy bill %s not found for update", bill_id)
            return False

        _apply(db_bill, bill)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Could not update energy bill %s", bill_id)
            return False

        logger.info("Updated energy bill %s", bill_id)
        return True


def _apply(db_bill: EnergyBill, bill: EnergyBillBase) -> None:
    """Copy bill fields onto a database row, replacing its property rows."""
    db_bill.group_id = bill.group_id
    db_bill.group_name = bill.group_name
    db_bill.bill_date = bill.date
    db_bill.total_group_value = bill.total_group_value
    db_bill.total_group_consumption = bill.total_group_consumption
    db_bill.is_paid = bill.is_paid
    db_bill.observations = bill.observations
    db_bill.properties = [
        EnergyBillProperty(position=position, **prop.model_dump(exclude={"id"}))
        for position, prop in enumerate(bill.properties_in_group)
    ]


def get_bill(db: Session, bill_id: int) -> EnergyBill:
    """Get a bill by ID."""
    bill = db.query(EnergyBill).filter(EnergyBill.id == bill_id).first()
    if not bill:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Energy bill not found",
        )
    return bill


def list_bills(db: Session, group_id: str | None = None) -> list[EnergyBill]:
    """Get bills in chronological order, optionally for one group."""
    query = db.query(EnergyBill)
    if group_id is not None:
        query = query.filter(EnergyBill.group_id == group_id)
    return query.order_by(EnergyBill.bill_date, EnergyBill.id).all()


def get_bill_history(db: Session, group_id: str | None = None) -> list[EnergyBillResponse]:
    """Get bills as schemas, ready for statistics and insights."""
    return [bill_to_response(b) for b in list_bills(db, group_id)]


def delete_bill(db: Session, bill_id: int) -> None:
    """Delete a bill and its property rows."""
    bill = get_bill(db, bill_id)
    db.delete(bill)
    db.commit()
    logger.info("Deleted energy bill %s", bill_id)


def bill_to_response(bill: EnergyBill) -> EnergyBillResponse:
    """Convert an EnergyBill model to a response schema."""
    return EnergyBillResponse(
        id=bill.id,
        group_id=bill.group_id,
        group_name=bill.group_name,
        date=bill.bill_date,
        total_group_value=bill.total_group_value,
        total_group_consumption=bill.total_group_consumption,
        is_paid=bill.is_paid,
        observations=bill.observations,
        properties_in_group=[_property_to_schema(p) for p in bill.properties],
        created_at=bill.created_at,
        updated_at=bill.updated_at,
    )


def _property_to_schema(prop: EnergyBillProperty) -> SharedPropertyConsumption:
    return SharedPropertyConsumption(
        id=f"{prop.group_id}-{prop.name}",
        name=prop.name,
        group_id=prop.group_id,
        property_id=prop.property_id,
        tenant_id=prop.tenant_id,
        tenant_name=prop.tenant_name,
        has_meter=prop.has_meter,
        is_residual_receiver=prop.is_residual_receiver,
        previous_reading=prop.previous_reading,
        current_reading=prop.current_reading,
        monthly_consumption=prop.monthly_consumption,
        proportional_consumption=prop.proportional_consumption,
        proportional_value=prop.proportional_value,
        is_paid=prop.is_paid,
        due_date=prop.due_date,
    )
