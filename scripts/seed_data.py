"""Seed script to populate the database with sample data."""

from datetime import date
from decimal import Decimal

from propdash.core.config import settings
from propdash.core.database import Base, SessionLocal, engine
from propdash.models.enums import PropertyStatus, TransactionType
from propdash.models.property import Property, Tenant
from propdash.models.transaction import Transaction
from propdash.services.energy.bills import SqlBillStore
from propdash.services.energy.draft import EnergyBillDraft

MONTHLY_READINGS = [
    # (bill date, total value, total kWh, readings per metered unit)
    (date(2024, 1, 10), "612.40", "540", {"Unit 101": "1210", "Unit 102": "860", "Unit 103": "455"}),
    (date(2024, 2, 10), "655.10", "575", {"Unit 101": "1370", "Unit 102": "985", "Unit 103": "560"}),
    (date(2024, 3, 10), "598.75", "520", {"Unit 101": "1515", "Unit 102": "1100", "Unit 103": "650"}),
]


def seed_database() -> None:
    """Seed the database with sample data."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(Property).first():
            print("Database already has data. Skipping seed.")
            return

        print("Seeding database...")

        group = settings.ENERGY_GROUPS[0]
        properties = []
        for index, unit in enumerate(group.properties, start=1):
            tenant = Tenant(name=f"Tenant {index}", email=f"tenant{index}@example.com")
            prop = Property(
                display_name=f"{group.name} - {unit}",
                address="123 Main Street",
                energy_unit_name=unit,
                status=PropertyStatus.RENTED,
                purchase_price=Decimal("250000"),
                monthly_rent=Decimal("1800"),
                tenant=tenant,
            )
            db.add(prop)
            properties.append(prop)
            db.add(
                Transaction(
                    type=TransactionType.INCOME,
                    amount=Decimal("1800"),
                    transaction_date=date(2024, 3, 5),
                    description=f"Rent {unit}",
                    property=prop,
                )
            )
        db.add(
            Transaction(
                type=TransactionType.EXPENSE,
                amount=Decimal("420"),
                transaction_date=date(2024, 3, 15),
                description="Cleaning and maintenance",
            )
        )
        db.commit()
        print(f"Created {len(properties)} properties in group {group.id}")

        draft = EnergyBillDraft(settings.ENERGY_GROUPS, properties=properties, group_id=group.id)
        store = SqlBillStore(db)
        previous: dict[str, str] = {"Unit 101": "1000", "Unit 102": "700", "Unit 103": "350"}
        for bill_date, value, consumption, readings in MONTHLY_READINGS:
            draft.set_details(bill_date=bill_date, is_paid=True)
            draft.set_totals(value=Decimal(value), consumption=Decimal(consumption))
            for unit, current in readings.items():
                draft.set_reading(unit, previous=Decimal(previous[unit]), current=Decimal(current))
            print(f"{bill_date}: {draft.validation.message}")
            bill_id = draft.save(store)
            print(f"Created energy bill {bill_id}")
            previous = readings

        print("Seeding complete.")
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
