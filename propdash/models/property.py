"""Property and tenant database models."""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from propdash.core.database import Base
from propdash.models.enums import PropertyStatus


class Tenant(Base):
    """Tenant renting one or more properties."""

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    # Relationships
    properties: Mapped[list["Property"]] = relationship(back_populates="tenant")


class Property(Base):
    """Property entity in the portfolio."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    display_name: Mapped[str] = mapped_column(String(100), index=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Name of the unit inside an energy group, matched exactly
    energy_unit_name: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    status: Mapped[PropertyStatus] = mapped_column(String(20), default=PropertyStatus.VACANT)
    purchase_price: Mapped[Decimal] = mapped_column(Numeric(precision=14, scale=2), default=0)
    monthly_rent: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), default=0)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    is_active: Mapped[bool] = mapped_column(default=True)

    # Foreign keys
    tenant_id: Mapped[int | None] = mapped_column(ForeignKey("tenants.id"), nullable=True)

    # Relationships
    tenant: Mapped["Tenant | None"] = relationship(back_populates="properties")
