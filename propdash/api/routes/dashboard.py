"""Transaction and financial dashboard routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from propdash.core.database import get_db
from propdash.schemas.finance import (
    ChartSeries,
    FinancialSummary,
    TransactionCreate,
    TransactionResponse,
)
from propdash.services import finance as finance_service
from propdash.services.property import get_active_properties

router = APIRouter(prefix="/dashboard", tags=["dashboard"])
transactions_router = APIRouter(prefix="/transactions", tags=["transactions"])


def _summary(db: Session, reference_date: date | None) -> FinancialSummary:
    properties = get_active_properties(db)
    transactions = finance_service.get_transactions(db)
    return finance_service.calculate_financial_summary(
        properties, transactions, reference_date or date.today()
    )


@router.get("/summary", response_model=FinancialSummary)
def get_summary(
    reference_date: date | None = Query(None, description="Any day of the month to summarize"),
    db: Session = Depends(get_db),
) -> FinancialSummary:
    """Income, expenses, occupancy and ROI for one month."""
    return _summary(db, reference_date)


@router.get("/chart", response_model=ChartSeries)
def get_chart(
    reference_date: date | None = Query(None, description="Last month of the window"),
    months: int = Query(6, ge=1, le=36),
    db: Session = Depends(get_db),
) -> ChartSeries:
    """Monthly income and expenses, oldest month first."""
    transactions = finance_service.get_transactions(db)
    return finance_service.monthly_chart_series(
        transactions, reference_date or date.today(), months
    )


@router.get("/insights", response_model=list[str])
def get_insights(
    reference_date: date | None = Query(None, description="Any day of the month to summarize"),
    db: Session = Depends(get_db),
) -> list[str]:
    """Remarks on the month's ROI, occupancy and cash flow."""
    return finance_service.dashboard_insights(_summary(db, reference_date))


@transactions_router.post(
    "/",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_transaction(
    data: TransactionCreate,
    db: Session = Depends(get_db),
):
    """Record income or an expense."""
    return finance_service.create_transaction(db, data)


@transactions_router.get("/", response_model=list[TransactionResponse])
def list_transactions(
    start: date | None = Query(None),
    end: date | None = Query(None),
    db: Session = Depends(get_db),
):
    """List transactions in date order."""
    return finance_service.get_transactions(db, start, end)


@transactions_router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Delete a transaction."""
    finance_service.delete_transaction(db, transaction_id)
