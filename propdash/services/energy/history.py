"""Bill history: previous-month import, group statistics and insights.

Bills are expected in chronological order; nothing here sorts them.
"""

from collections.abc import Iterator, Sequence
from datetime import date
from decimal import Decimal

from propdash.core.config import settings
from propdash.models.enums import Trend
from propdash.schemas.energy import ZERO, ConsumptionStats, EnergyBillBase
from propdash.services.energy.readings import refresh_consumption

HUNDRED = Decimal("100")


def import_previous_month(draft_bill: EnergyBillBase, previous_bill: EnergyBillBase) -> EnergyBillBase:
    """Seed a draft's previous readings from the last bill's current readings.

    Only metered properties are touched, matched by name. Current readings
    are left for the user to fill in.
    """
    last_readings = {p.name: p.current_reading for p in previous_bill.properties_in_group}

    properties = []
    for prop in draft_bill.properties_in_group:
        if prop.has_meter and prop.name in last_readings:
            prop = refresh_consumption(
                prop.model_copy(update={"previous_reading": last_readings[prop.name]})
            )
        properties.append(prop)

    return draft_bill.model_copy(update={"properties_in_group": properties})


def percent_change(current: Decimal, reference: Decimal) -> Decimal:
    """Percentage change of current relative to reference (0 if reference is 0)."""
    if reference == 0:
        return ZERO
    return (current - reference) / reference * HUNDRED


def classify_trend(variation: Decimal, deadband: Decimal | None = None) -> Trend:
    """Classify a percentage variation, ignoring moves inside the deadband."""
    if deadband is None:
        deadband = settings.TREND_DEADBAND_PERCENT
    if variation > deadband:
        return Trend.INCREASING
    if variation < -deadband:
        return Trend.DECREASING
    return Trend.STABLE


def compute_stats(
    all_bills: Sequence[EnergyBillBase],
    group_id: str,
    deadband: Decimal | None = None,
) -> ConsumptionStats:
    """Average consumption/value, trend and latest month-over-month variation."""
    bills = [b for b in all_bills if b.group_id == group_id]
    if not bills:
        return ConsumptionStats(
            average_consumption=ZERO,
            average_value=ZERO,
            trend=Trend.STABLE,
            monthly_variation=ZERO,
        )

    count = Decimal(len(bills))
    average_consumption = sum((b.total_group_consumption for b in bills), ZERO) / count
    average_value = sum((b.total_group_value for b in bills), ZERO) / count

    variation = ZERO
    if len(bills) >= 2:
        variation = percent_change(
            bills[-1].total_group_consumption,
            bills[-2].total_group_consumption,
        )

    return ConsumptionStats(
        average_consumption=average_consumption,
        average_value=average_value,
        trend=classify_trend(variation, deadband),
        monthly_variation=variation,
    )


class ConsumptionInsights:
    """Insight messages for a draft bill compared against the group history.

    Messages are produced lazily; iterating again re-derives them from the
    inputs, so the sequence can be consumed any number of times.
    """

    def __init__(
        self,
        draft_bill: EnergyBillBase,
        all_bills: Sequence[EnergyBillBase],
        group_id: str,
        reference_date: date | None = None,
        spike_percent: Decimal | None = None,
    ):
        self._draft = draft_bill
        self._all_bills = all_bills
        self._group_id = group_id
        self._reference_date = reference_date
        self._spike = settings.CONSUMPTION_SPIKE_PERCENT if spike_percent is None else spike_percent

    def __iter__(self) -> Iterator[str]:
        history = [b for b in self._all_bills if b.group_id == self._group_id]
        if not history:
            return

        stats = compute_stats(history, self._group_id)
        yield from self._consumption_insights(stats)
        yield from self._price_insights(history)
        yield from self._trend_insights(stats)
        yield from self._property_insights()
        yield from self._payment_insights()

    def _consumption_insights(self, stats: ConsumptionStats) -> Iterator[str]:
        consumption = self._draft.total_group_consumption
        if consumption <= 0 or stats.average_consumption <= 0:
            return

        change = percent_change(consumption, stats.average_consumption)
        if change > self._spike:
            yield (
                f"Consumption of {consumption} kWh is {change:.1f}% above "
                f"the group average of {stats.average_consumption:.1f} kWh"
            )
        elif change < -self._spike:
            yield (
                f"Consumption of {consumption} kWh is {-change:.1f}% below "
                f"the group average of {stats.average_consumption:.1f} kWh"
            )

    def _price_insights(self, history: list[EnergyBillBase]) -> Iterator[str]:
        draft = self._draft
        if draft.total_group_consumption <= 0 or draft.total_group_value <= 0:
            return

        rates = [
            b.total_group_value / b.total_group_consumption
            for b in history
            if b.total_group_consumption > 0
        ]
        if not rates:
            return

        average_rate = sum(rates, ZERO) / len(rates)
        rate = draft.total_group_value / draft.total_group_consumption
        change = percent_change(rate, average_rate)
        if change > self._spike:
            yield (
                f"Price per kWh ({rate:.2f}) is {change:.1f}% above "
                f"the historical average of {average_rate:.2f}"
            )
        elif change < -self._spike:
            yield (
                f"Price per kWh ({rate:.2f}) is {-change:.1f}% below "
                f"the historical average of {average_rate:.2f}"
            )

    def _trend_insights(self, stats: ConsumptionStats) -> Iterator[str]:
        if stats.trend == Trend.INCREASING:
            yield f"Group consumption is rising: {stats.monthly_variation:+.1f}% on the previous bill"
        elif stats.trend == Trend.DECREASING:
            yield f"Group consumption is falling: {stats.monthly_variation:+.1f}% on the previous bill"

    def _property_insights(self) -> Iterator[str]:
        draft = self._draft
        total = draft.total_group_consumption

        for prop in draft.properties_in_group:
            if prop.is_residual_receiver and total > 0 and prop.proportional_consumption * 2 > total:
                share = prop.proportional_consumption / total * HUNDRED
                yield f"{prop.name} absorbs {share:.1f}% of the group consumption without a meter"
            if prop.has_meter and prop.current_reading < prop.previous_reading:
                yield (
                    f"Meter reading for {prop.name} went backwards "
                    f"({prop.previous_reading} -> {prop.current_reading}); check for a meter reset"
                )

    def _payment_insights(self) -> Iterator[str]:
        today = self._reference_date or date.today()
        pending = [p for p in self._draft.properties_in_group if not p.is_paid]

        for prop in pending:
            if prop.due_date is not None and prop.due_date < today:
                yield f"Payment for {prop.name} is overdue since {prop.due_date.isoformat()}"

        if pending and not self._draft.is_paid:
            noun = "property" if len(pending) == 1 else "properties"
            yield f"{len(pending)} {noun} still pending payment for this bill"


def generate_insights(
    draft_bill: EnergyBillBase,
    all_bills: Sequence[EnergyBillBase],
    group_id: str,
    reference_date: date | None = None,
) -> ConsumptionInsights:
    """Insight messages for a draft bill; empty when the group has no history."""
    return ConsumptionInsights(draft_bill, all_bills, group_id, reference_date=reference_date)
