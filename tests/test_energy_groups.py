"""Tests for energy group configuration."""

import json

import pytest
from pydantic import ValidationError

from propdash.core.config import DEFAULT_ENERGY_GROUPS, Settings
from propdash.schemas.energy import EnergyGroup
from propdash.services.energy.groups import find_group, get_energy_groups


class TestEnergyGroupSchema:
    """Validation of a single group definition."""

    def test_valid_group(self) -> None:
        group = EnergyGroup(id="g", name="G", properties=["A", "B"], residual_receiver="B")
        assert group.residual_receiver == "B"

    def test_residual_receiver_must_be_member(self) -> None:
        with pytest.raises(ValidationError, match="not a member"):
            EnergyGroup(id="g", name="G", properties=["A", "B"], residual_receiver="C")

    def test_members_must_be_unique(self) -> None:
        with pytest.raises(ValidationError, match="unique"):
            EnergyGroup(id="g", name="G", properties=["A", "A"], residual_receiver="A")

    def test_members_required(self) -> None:
        with pytest.raises(ValidationError):
            EnergyGroup(id="g", name="G", properties=[], residual_receiver="A")

    def test_blank_member_name(self) -> None:
        with pytest.raises(ValidationError):
            EnergyGroup(id="g", name="G", properties=["A", " "], residual_receiver="A")


class TestSettingsGroups:
    """Loading the group list from settings."""

    def test_defaults(self) -> None:
        groups = get_energy_groups()
        assert [g.id for g in groups] == [g.id for g in DEFAULT_ENERGY_GROUPS]

    def test_duplicate_group_ids_rejected(self) -> None:
        group = {"id": "g", "name": "G", "properties": ["A"], "residual_receiver": "A"}
        with pytest.raises(ValidationError, match="unique"):
            Settings(ENERGY_GROUPS=[group, group])

    def test_groups_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        groups = [
            {
                "id": "annex",
                "name": "Annex",
                "properties": ["Loft", "Basement"],
                "residual_receiver": "Basement",
            }
        ]
        monkeypatch.setenv("ENERGY_GROUPS", json.dumps(groups))

        loaded = Settings().ENERGY_GROUPS

        assert len(loaded) == 1
        assert loaded[0].properties == ["Loft", "Basement"]

    def test_invalid_group_in_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        groups = [{"id": "x", "name": "X", "properties": ["A"], "residual_receiver": "Z"}]
        monkeypatch.setenv("ENERGY_GROUPS", json.dumps(groups))

        with pytest.raises(ValidationError):
            Settings()


class TestFindGroup:
    def test_found(self) -> None:
        assert find_group("garden-houses").name == "Garden Houses"

    def test_missing(self) -> None:
        assert find_group("nope") is None

    def test_explicit_group_list(self) -> None:
        groups = [EnergyGroup(id="solo", name="Solo", properties=["A"], residual_receiver="A")]
        assert find_group("solo", groups) is groups[0]
        assert find_group("main-building", groups) is None
