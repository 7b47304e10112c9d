"""Financial dashboard: transactions, monthly summary and chart series."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from propdash.models.enums import PropertyStatus, TransactionType
from propdash.models.property import Property
from propdash.models.transaction import Transaction
from propdash.schemas.finance import (
    ChartSeries,
    FinancialSummary,
    MonthlyChartPoint,
    TransactionCreate,
)
from propdash.services.property import get_property

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def create_transaction(db: Session, data: TransactionCreate) -> Transaction:
    """Record a transaction, optionally against a property."""
    if data.property_id is not None:
        get_property(db, data.property_id)

    transaction = Transaction(**data.model_dump())
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    return transaction


def get_transactions(
    db: Session,
    start: date | None = None,
    end: date | None = None,
) -> list[Transaction]:
    """Get transactions in date order, optionally within [start, end]."""
    query = db.query(Transaction)
    if start is not None:
        query = query.filter(Transaction.transaction_date >= start)
    if end is not None:
        query = query.filter(Transaction.transaction_date <= end)
    return query.order_by(Transaction.transaction_date, Transaction.id).all()


def delete_transaction(db: Session, transaction_id: int) -> None:
    """Delete a transaction."""
    transaction = db.query(Transaction).filter(Transaction.id == transaction_id).first()
    if not transaction:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Transaction not found",
        )
    db.delete(transaction)
    db.commit()


def _same_month(day: date, reference: date) -> bool:
    return day.year == reference.year and day.month == reference.month


def _totals(transactions: Sequence[Transaction]) -> tuple[Decimal, Decimal]:
    income = sum((t.amount for t in transactions if t.type == TransactionType.INCOME), ZERO)
    expenses = sum((t.amount for t in transactions if t.type == TransactionType.EXPENSE), ZERO)
    return income, expenses


def calculate_financial_summary(
    properties: Sequence[Property],
    transactions: Sequence[Transaction],
    reference_date: date,
) -> FinancialSummary:
    """Summarize income, expenses, occupancy and ROI for the reference month."""
    monthly = [t for t in transactions if _same_month(t.transaction_date, reference_date)]
    income, expenses = _totals(monthly)
    net_income = income - expenses

    total_properties = len(properties)
    rented = sum(1 for p in properties if p.status == PropertyStatus.RENTED)
    occupancy_rate = (
        Decimal(rented) / Decimal(total_properties) * HUNDRED if total_properties else ZERO
    )

    total_investment = sum((p.purchase_price or ZERO for p in properties), ZERO)
    monthly_roi = net_income / total_investment * HUNDRED if total_investment > 0 else ZERO

    return FinancialSummary(
        total_income=income,
        total_expenses=expenses,
        net_income=net_income,
        occupancy_rate=occupancy_rate,
        total_properties=total_properties,
        rented_properties=rented,
        monthly_roi=monthly_roi,
    )


def _months_back(reference_date: date, months: int) -> list[date]:
    """First day of each of the last `months` months, oldest first."""
    firsts = []
    year, month = reference_date.year, reference_date.month
    for _ in range(months):
        firsts.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(firsts))


def monthly_chart_series(
    transactions: Sequence[Transaction],
    reference_date: date,
    months: int = 6,
) -> ChartSeries:
    """Income, expenses and net per month for the window ending at reference_date."""
    points: list[MonthlyChartPoint] = []
    for month_start in _months_back(reference_date, months):
        income, expenses = _totals(
            [t for t in transactions if _same_month(t.transaction_date, month_start)]
        )
        net = income - expenses
        points.append(
            MonthlyChartPoint(
                month=month_start.strftime("%Y-%m"),
                income=income,
                expenses=expenses,
                net=net,
                profit=max(net, ZERO),
                loss=max(-net, ZERO),
            )
        )

    return ChartSeries(
        points=points,
        total_income=sum((p.income for p in points), ZERO),
        total_expenses=sum((p.expenses for p in points), ZERO),
    )


def dashboard_insights(summary: FinancialSummary) -> list[str]:
    """Short remarks on ROI, occupancy and cash flow."""
    roi = "above" if summary.monthly_roi > 1 else "within"
    occupancy = (
        "Great occupancy" if summary.occupancy_rate > 80 else "Room to improve occupancy"
    )
    cash_flow = "Positive cash flow" if summary.net_income > 0 else "Watch the cash flow"
    return [
        f"Monthly ROI of {summary.monthly_roi:.2f}% is {roi} the market average",
        f"{occupancy}: {summary.occupancy_rate:.1f}% of properties rented",
        f"{cash_flow} this month",
    ]
