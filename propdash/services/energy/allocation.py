"""Proportional distribution of a shared energy bill and its validation."""

import logging
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from propdash.core.config import settings
from propdash.schemas.energy import ZERO, SharedPropertyConsumption, ValidationResult

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def allocate(
    total_value: Decimal,
    total_consumption: Decimal,
    properties: Sequence[SharedPropertyConsumption],
) -> list[SharedPropertyConsumption]:
    """Distribute a group bill across its properties.

    Metered properties keep their own monthly consumption. The residual
    receiver gets whatever the metered properties do not account for,
    clamped to 0. Each property then pays:

        value = total_value * proportional_consumption / total_consumption

    Values are rounded to cents. The rounding drift goes to the share with
    the largest consumption (the residual receiver on ties), so the rounded
    values add up to the exact total rounded to cents.

    Input records are not modified; new records are returned in the same order.
    """
    metered_sum = sum(
        (p.monthly_consumption for p in properties if p.has_meter),
        ZERO,
    )
    residual = max(total_consumption - metered_sum, ZERO)

    if metered_sum > total_consumption:
        logger.warning(
            "Metered consumption %s exceeds group total %s; residual share clamped to 0",
            metered_sum,
            total_consumption,
        )

    consumptions: list[Decimal] = []
    for prop in properties:
        if prop.is_residual_receiver:
            consumptions.append(residual)
        elif prop.has_meter:
            consumptions.append(prop.monthly_consumption)
        else:
            consumptions.append(ZERO)

    values = _rounded_shares(total_value, consumptions, total_consumption, properties)

    return [
        prop.model_copy(
            update={"proportional_consumption": consumption, "proportional_value": value}
        )
        for prop, consumption, value in zip(properties, consumptions, values)
    ]


def _rounded_shares(
    total_value: Decimal,
    consumptions: list[Decimal],
    total_consumption: Decimal,
    properties: Sequence[SharedPropertyConsumption],
) -> list[Decimal]:
    """Cent values proportional to consumption; all 0 when there is nothing to divide by."""
    if total_consumption <= 0 or not consumptions:
        return [ZERO for _ in consumptions]

    exact = [total_value * c / total_consumption for c in consumptions]
    rounded = [v.quantize(CENT, rounding=ROUND_HALF_UP) for v in exact]

    drift = sum(exact, ZERO).quantize(CENT, rounding=ROUND_HALF_UP) - sum(rounded, ZERO)
    if drift:
        receiver = max(
            range(len(consumptions)),
            key=lambda i: (consumptions[i], properties[i].is_residual_receiver),
        )
        rounded[receiver] += drift

    return rounded


def validate(
    properties: Sequence[SharedPropertyConsumption],
    total_consumption: Decimal,
    tolerance: Decimal | None = None,
) -> ValidationResult:
    """Check that the allocated consumption adds up to the declared group total."""
    if tolerance is None:
        tolerance = settings.CONSUMPTION_TOLERANCE

    allocated = sum((p.proportional_consumption for p in properties), ZERO)
    difference = total_consumption - allocated

    if abs(difference) <= tolerance:
        return ValidationResult(
            is_valid=True,
            message=f"Distributed consumption matches the group total of {total_consumption} kWh",
            difference=difference,
        )

    direction = "below" if difference > 0 else "above"
    return ValidationResult(
        is_valid=False,
        message=(
            f"Distributed consumption ({allocated} kWh) is {abs(difference)} kWh "
            f"{direction} the group total of {total_consumption} kWh"
        ),
        difference=difference,
    )
