"""Energy bill database models."""

from datetime import UTC, date, datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from propdash.core.database import Base


class EnergyBill(Base):
    """One billing period of a shared energy group."""

    __tablename__ = "energy_bills"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    group_id: Mapped[str] = mapped_column(String(50), index=True)
    group_name: Mapped[str] = mapped_column(String(100))
    bill_date: Mapped[date] = mapped_column(index=True)
    total_group_value: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2))
    total_group_consumption: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=3))
    is_paid: Mapped[bool] = mapped_column(default=False)
    observations: Mapped[str] = mapped_column(Text, default="")

    # Metadata
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    properties: Mapped[list["EnergyBillProperty"]] = relationship(
        back_populates="bill",
        cascade="all, delete-orphan",
        order_by="EnergyBillProperty.position",
    )


class EnergyBillProperty(Base):
    """A property's readings and allocated share within a bill."""

    __tablename__ = "energy_bill_properties"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    bill_id: Mapped[int] = mapped_column(ForeignKey("energy_bills.id"), index=True)
    position: Mapped[int] = mapped_column(default=0)  # Order within the group

    name: Mapped[str] = mapped_column(String(100))
    group_id: Mapped[str] = mapped_column(String(50))
    property_id: Mapped[int | None] = mapped_column(nullable=True)
    tenant_id: Mapped[int | None] = mapped_column(nullable=True)
    tenant_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    has_meter: Mapped[bool] = mapped_column(default=True)
    is_residual_receiver: Mapped[bool] = mapped_column(default=False)

    previous_reading: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=3))
    current_reading: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=3))
    monthly_consumption: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=3))
    proportional_consumption: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=3))
    proportional_value: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2))

    is_paid: Mapped[bool] = mapped_column(default=False)
    due_date: Mapped[date | None] = mapped_column(nullable=True)

    # Relationships
    bill: Mapped["EnergyBill"] = relationship(back_populates="properties")
