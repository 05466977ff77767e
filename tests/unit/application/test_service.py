from unittest.mock import Mock

import pytest

from src.forum.application.service import MembershipService
from src.forum.domain.errors import HierarchyError, UnknownLabelError
from src.forum.domain.mapping import EntityRegistry
from src.forum.domain.models import (
    BronzeMembership,
    Capabilities,
    GoldMembership,
    Membership,
    PlatinumMembership,
    SilverMembership,
)

ALL_TRUE = Capabilities(can_post=True, can_comment=True, can_follow=True)


@pytest.mark.parametrize("tier", [GoldMembership(), GoldMembership, "Gold"])
def test_capability_accepts_any_tier_reference(service, tier):
    assert service.capability(tier) == ALL_TRUE


def test_capability_is_constant(service):
    assert service.capability("Gold") == service.capability("Gold")


def test_upgrade_paths_for_gold_is_empty(service):
    assert service.upgrade_paths("Gold") == ()


def test_upgrade_paths_for_silver(service):
    assert service.upgrade_paths(SilverMembership) == (
        GoldMembership(),
        PlatinumMembership(),
    )


def test_unknown_label(service):
    with pytest.raises(UnknownLabelError):
        service.capability("Diamond")


def test_tiers_lowest_first(service):
    assert [t.label() for t in service.tiers()] == ["Bronze", "Silver", "Gold", "Platinum"]


def test_can_upgrade(service):
    assert service.can_upgrade("Bronze", "Gold") is True
    assert service.can_upgrade(SilverMembership(), PlatinumMembership) is True
    assert service.can_upgrade("Silver", "Bronze") is False
    assert service.can_upgrade("Gold", "Gold") is False


def test_terminal_tiers(service):
    assert service.is_terminal("Gold") is True
    assert service.is_terminal("Platinum") is True
    assert service.is_terminal(BronzeMembership()) is False


def test_capability_matrix(service):
    matrix = service.capability_matrix()

    assert set(matrix) == {"Bronze", "Silver", "Gold", "Platinum"}
    assert matrix["Gold"] == ALL_TRUE
    assert matrix["Bronze"].can_post is False


def test_domain_hierarchy_is_valid(service):
    service.validate_hierarchy()


def _registry_with(*variants: type[Membership]) -> EntityRegistry:
    reg = EntityRegistry()
    reg.register(Membership, "Membership")
    for variant in variants:
        reg.register(variant, variant.__name__)
    return reg


def test_validate_rejects_self_loop():
    class LoopMembership(GoldMembership):
        def upgrades(self):
            return (LoopMembership(),)

    service = MembershipService(_registry_with(LoopMembership))

    with pytest.raises(HierarchyError, match="itself"):
        service.validate_hierarchy()


def test_validate_rejects_unregistered_target():
    class StrayMembership(GoldMembership):
        pass

    class PointsAtStray(GoldMembership):
        def upgrades(self):
            return (StrayMembership(),)

    service = MembershipService(_registry_with(PointsAtStray))

    with pytest.raises(HierarchyError, match="unregistered"):
        service.validate_hierarchy()


def test_validate_failure_is_logged():
    class LoopMembership(SilverMembership):
        def upgrades(self):
            return (LoopMembership(),)

    service = MembershipService(_registry_with(LoopMembership))
    service.telemetry = Mock()

    with pytest.raises(HierarchyError):
        service.validate_hierarchy()

    service.telemetry.log_error.assert_called_once()


@pytest.mark.parametrize("tier", ["Membership", Membership])
def test_abstract_base_is_not_a_tier(service, tier):
    """
    GIVEN the abstract base, by label or by class
    WHEN any tier operation is asked about it
    THEN it is rejected as an unknown tier instead of failing to instantiate
    """
    with pytest.raises(UnknownLabelError):
        service.capability(tier)
    with pytest.raises(UnknownLabelError):
        service.upgrade_paths(tier)
    with pytest.raises(UnknownLabelError):
        service.is_terminal(tier)
    with pytest.raises(UnknownLabelError):
        service.can_upgrade("Bronze", tier)
