"""Transaction database model - income and expense ledger."""

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from propdash.core.database import Base
from propdash.models.enums import TransactionType

if TYPE_CHECKING:
    from propdash.models.property import Property


class Transaction(Base):
    """Ledger entry for money received or spent."""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    type: Mapped[TransactionType] = mapped_column(String(20), index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2))
    transaction_date: Mapped[date] = mapped_column(index=True)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    # Foreign keys
    property_id: Mapped[int | None] = mapped_column(
        ForeignKey("properties.id"),
        nullable=True,
    )

    # Relationships
    property: Mapped["Property | None"] = relationship()
