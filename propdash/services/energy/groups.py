"""Energy group lookups over the configured group list."""

from collections.abc import Sequence

from fastapi import HTTPException, status

from propdash.core.config import settings
from propdash.schemas.energy import EnergyGroup


def get_energy_groups() -> list[EnergyGroup]:
    """Get the configured energy groups in display order."""
    return list(settings.ENERGY_GROUPS)


def find_group(group_id: str, groups: Sequence[EnergyGroup] | None = None) -> EnergyGroup | None:
    """Find a group by id."""
    if groups is None:
        groups = settings.ENERGY_GROUPS
    return next((g for g in groups if g.id == group_id), None)


def get_group(group_id: str) -> EnergyGroup:
    """Get a configured group by id."""
    group = find_group(group_id)
    if not group:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Energy group '{group_id}' not found",
        )
    return group
