"""Enum definitions for properties, transactions and energy trends."""

from enum import Enum


class PropertyStatus(str, Enum):
    """Occupancy status of a property."""

    RENTED = "rented"
    VACANT = "vacant"
    MAINTENANCE = "maintenance"


class TransactionType(str, Enum):
    """Direction of a cash movement."""

    INCOME = "income"
    EXPENSE = "expense"


class Trend(str, Enum):
    """Direction of a group's consumption compared with the prior bill."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
