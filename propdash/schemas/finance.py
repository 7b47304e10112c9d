"""Transaction and dashboard Pydantic schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, field_validator

from propdash.models.enums import TransactionType


class TransactionCreate(BaseModel):
    """Schema for recording income or an expense."""

    type: TransactionType
    amount: Decimal
    transaction_date: date
    description: str | None = None
    property_id: int | None = None

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        """Amounts are positive; the type carries the direction."""
        if v <= 0:
            raise ValueError("Amount must be positive")
        return v


class TransactionResponse(TransactionCreate):
    """Schema for transaction response."""

    id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class FinancialSummary(BaseModel):
    """Portfolio figures for one calendar month."""

    total_income: Decimal
    total_expenses: Decimal
    net_income: Decimal
    occupancy_rate: Decimal  # percent
    total_properties: int
    rented_properties: int
    monthly_roi: Decimal  # percent of total purchase price


class MonthlyChartPoint(BaseModel):
    """Income and expenses of one month."""

    month: str  # YYYY-MM
    income: Decimal
    expenses: Decimal
    net: Decimal
    profit: Decimal
    loss: Decimal


class ChartSeries(BaseModel):
    """Monthly points, oldest first, with totals over the whole window."""

    points: list[MonthlyChartPoint]
    total_income: Decimal
    total_expenses: Decimal
