"""Editable energy bill: the form state behind the bill calculator.

Every write re-derives monthly consumption, the allocation and its
validation, so the derived fields are always consistent with the inputs.
"""

import logging
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from propdash.core.config import settings
from propdash.models.property import Property
from propdash.schemas.energy import (
    ZERO,
    EnergyBillBase,
    EnergyBillDraftResponse,
    EnergyBillResponse,
    EnergyGroup,
    SharedPropertyConsumption,
    ValidationResult,
)
from propdash.services.energy import history
from propdash.services.energy.allocation import allocate, validate
from propdash.services.energy.bills import BillStore
from propdash.services.energy.readings import build_group_properties, refresh_consumption

logger = logging.getLogger(__name__)


def _warn_if_backwards(prop: SharedPropertyConsumption) -> None:
    if prop.has_meter and prop.current_reading < prop.previous_reading:
        logger.warning(
            "Meter reading for %s went backwards (%s -> %s); consumption clamped to 0",
            prop.name,
            prop.previous_reading,
            prop.current_reading,
        )


class UnknownGroupError(LookupError):
    """Raised when a draft is pointed at a group that is not configured."""


class EnergyBillDraft:
    """A bill being entered or edited for one energy group."""

    def __init__(
        self,
        groups: Sequence[EnergyGroup],
        properties: Sequence[Property] = (),
        group_id: str | None = None,
        tolerance: Decimal | None = None,
    ):
        if not groups:
            raise ValueError("At least one energy group is required")
        self._groups = list(groups)
        self._linked_properties = list(properties)
        self._tolerance = settings.CONSUMPTION_TOLERANCE if tolerance is None else tolerance

        self.editing_bill_id: int | None = None
        self.group = self._groups[0]
        self._reset_fields()
        self.select_group(group_id or self.group.id)

    # Group and lifecycle

    def select_group(self, group_id: str) -> None:
        """Switch to a group, reseeding its properties with zero readings."""
        group = next((g for g in self._groups if g.id == group_id), None)
        if group is None:
            raise UnknownGroupError(f"Energy group '{group_id}' not found")
        self.group = group
        self.properties = build_group_properties(group, self._linked_properties)
        self._recompute()

    def edit(self, bill: EnergyBillResponse) -> None:
        """Load a stored bill for editing, keeping its property records as stored."""
        self.select_group(bill.group_id)
        self.editing_bill_id = bill.id
        self._load_details(bill)
        self.properties = [p.model_copy() for p in bill.properties_in_group]
        self._recompute()

    def load(self, bill: EnergyBillBase) -> None:
        """Take user input from a submitted bill.

        The group's property records are reseeded from configuration and only
        the entered fields (readings, payment, due date) are taken over,
        matched by name. Readings sent for the residual receiver are ignored.
        """
        self.select_group(bill.group_id)
        self._load_details(bill)

        entered = {p.name: p for p in bill.properties_in_group}
        properties = []
        for prop in self.properties:
            incoming = entered.get(prop.name)
            if incoming is not None:
                update = {"is_paid": incoming.is_paid, "due_date": incoming.due_date}
                if prop.has_meter:
                    update["previous_reading"] = incoming.previous_reading
                    update["current_reading"] = incoming.current_reading
                prop = prop.model_copy(update=update)
                _warn_if_backwards(prop)
            properties.append(prop)

        self.properties = properties
        self._recompute()

    def _load_details(self, bill: EnergyBillBase) -> None:
        self.bill_date = bill.date
        self.observations = bill.observations
        self.is_paid = bill.is_paid
        self.total_value = bill.total_group_value
        self.total_consumption = bill.total_group_consumption

    def reset(self) -> None:
        """Discard all input and stop editing; the selected group is kept."""
        self.editing_bill_id = None
        self._reset_fields()
        self.select_group(self.group.id)

    def _reset_fields(self) -> None:
        self.bill_date = date.today()
        self.observations = ""
        self.is_paid = False
        self.total_value = ZERO
        self.total_consumption = ZERO
        self.properties: list[SharedPropertyConsumption] = []
        self.validation = ValidationResult(is_valid=True, message="", difference=ZERO)

    # Writes

    def set_totals(
        self,
        value: Decimal | None = None,
        consumption: Decimal | None = None,
    ) -> None:
        """Set the group's total bill value and/or total consumption."""
        if value is not None:
            self.total_value = value
        if consumption is not None:
            self.total_consumption = consumption
        self._recompute()

    def set_reading(
        self,
        name: str,
        previous: Decimal | None = None,
        current: Decimal | None = None,
    ) -> None:
        """Enter meter readings for a property; the residual receiver has none."""
        prop = self._property(name)
        if not prop.has_meter:
            logger.debug("Ignoring readings for %s, it has no meter", name)
            return

        update: dict[str, Decimal] = {}
        if previous is not None:
            update["previous_reading"] = previous
        if current is not None:
            update["current_reading"] = current
        prop = prop.model_copy(update=update)
        _warn_if_backwards(prop)
        self._replace(prop)

    def set_property_payment(self, name: str, is_paid: bool) -> None:
        """Mark one property's share as paid or unpaid."""
        self._replace(self._property(name).model_copy(update={"is_paid": is_paid}))

    def set_property_due_date(self, name: str, due_date: date | None) -> None:
        """Set the due date of one property's share."""
        self._replace(self._property(name).model_copy(update={"due_date": due_date}))

    def set_details(
        self,
        bill_date: date | None = None,
        observations: str | None = None,
        is_paid: bool | None = None,
    ) -> None:
        """Set bill date, free-text observations and the overall paid flag."""
        if bill_date is not None:
            self.bill_date = bill_date
        if observations is not None:
            self.observations = observations
        if is_paid is not None:
            self.is_paid = is_paid

    def import_previous_month(self, bills: Sequence[EnergyBillBase]) -> bool:
        """Carry the latest bill's current readings into this draft's previous readings.

        Returns False when the group has no earlier bill.
        """
        group_bills = [b for b in bills if b.group_id == self.group.id]
        if not group_bills:
            return False

        imported = history.import_previous_month(self.to_bill(), group_bills[-1])
        self.properties = list(imported.properties_in_group)
        self._recompute()
        return True

    # Reads

    def to_bill(self) -> EnergyBillBase:
        """Snapshot the draft as a bill ready to be stored."""
        return EnergyBillBase(
            group_id=self.group.id,
            group_name=self.group.name,
            date=self.bill_date,
            total_group_value=self.total_value,
            total_group_consumption=self.total_consumption,
            is_paid=self.is_paid,
            observations=self.observations,
            properties_in_group=[p.model_copy() for p in self.properties],
        )

    def to_response(self) -> EnergyBillDraftResponse:
        """Snapshot the draft together with its current validation."""
        return EnergyBillDraftResponse(**self.to_bill().model_dump(), validation=self.validation)

    def insights(
        self,
        bills: Sequence[EnergyBillBase],
        reference_date: date | None = None,
    ) -> history.ConsumptionInsights:
        """Insights for the current draft against the group history."""
        return history.generate_insights(
            self.to_bill(), bills, self.group.id, reference_date=reference_date
        )

    def save(self, store: BillStore) -> int | None:
        """Persist the draft and return the bill id.

        The draft is reset on success. On failure None is returned and the
        draft is left intact so no input is lost.
        """
        bill = self.to_bill()
        if self.editing_bill_id is not None:
            bill_id = self.editing_bill_id if store.update(self.editing_bill_id, bill) else None
        else:
            bill_id = store.add(bill)

        if bill_id is None:
            logger.warning("Energy bill for group %s was not saved; keeping draft", self.group.id)
            return None

        self.reset()
        return bill_id

    # Internals

    def _property(self, name: str) -> SharedPropertyConsumption:
        prop = next((p for p in self.properties if p.name == name), None)
        if prop is None:
            raise KeyError(f"Property '{name}' is not part of group '{self.group.id}'")
        return prop

    def _replace(self, updated: SharedPropertyConsumption) -> None:
        self.properties = [updated if p.name == updated.name else p for p in self.properties]
        self._recompute()

    def _recompute(self) -> None:
        refreshed = [refresh_consumption(p) for p in self.properties]
        self.properties = allocate(self.total_value, self.total_consumption, refreshed)
        self.validation = validate(self.properties, self.total_consumption, self._tolerance)
