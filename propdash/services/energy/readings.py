"""Meter reading normalization and seeding of group property records."""

from collections.abc import Iterable
from decimal import Decimal

from propdash.models.property import Property
from propdash.schemas.energy import ZERO, EnergyGroup, SharedPropertyConsumption


def compute_consumption(current: Decimal, previous: Decimal) -> Decimal:
    """
    Calculate the consumption between two meter readings.

    Returns 0 if the current reading is below the previous one (e.g. the
    meter was replaced or reset).
    """
    if current < previous:
        return ZERO
    return current - previous


def refresh_consumption(record: SharedPropertyConsumption) -> SharedPropertyConsumption:
    """Re-derive monthly consumption; properties without a meter report 0."""
    monthly = (
        compute_consumption(record.current_reading, record.previous_reading)
        if record.has_meter
        else ZERO
    )
    return record.model_copy(update={"monthly_consumption": monthly})


def create_shared_property_consumption(
    name: str,
    group_id: str,
    has_meter: bool,
    is_residual_receiver: bool,
    property_id: int | None = None,
    tenant_id: int | None = None,
    tenant_name: str | None = None,
) -> SharedPropertyConsumption:
    """Create a zeroed consumption record for one member of a group."""
    return SharedPropertyConsumption(
        id=f"{group_id}-{name}",
        name=name,
        group_id=group_id,
        property_id=property_id,
        tenant_id=tenant_id,
        tenant_name=tenant_name,
        has_meter=has_meter,
        is_residual_receiver=is_residual_receiver,
    )


def find_linked_property(name: str, properties: Iterable[Property]) -> Property | None:
    """Find the property whose energy unit name equals a group member name."""
    return next((p for p in properties if p.energy_unit_name == name), None)


def build_group_properties(
    group: EnergyGroup,
    properties: Iterable[Property] = (),
) -> list[SharedPropertyConsumption]:
    """Seed one record per group member, linking properties and tenants by name."""
    properties = list(properties)
    records: list[SharedPropertyConsumption] = []

    for name in group.properties:
        linked = find_linked_property(name, properties)
        tenant = linked.tenant if linked else None
        is_residual = name == group.residual_receiver

        records.append(
            create_shared_property_consumption(
                name,
                group.id,
                has_meter=not is_residual,
                is_residual_receiver=is_residual,
                property_id=linked.id if linked else None,
                tenant_id=tenant.id if tenant else None,
                tenant_name=tenant.name if tenant else None,
            )
        )

    return records
