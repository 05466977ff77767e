import inspect
from typing import Union, cast

from src.forum.domain.errors import HierarchyError, UnknownLabelError
from src.forum.domain.mapping import EntityRegistry, registry
from src.forum.domain.models import Capabilities, Membership
from src.shared.telemetry import Telemetry, measure_time

# A tier can be named by instance, by variant class or by its node label
TierRef = Union[Membership, type[Membership], str]


class MembershipService:
    def __init__(self, entity_registry: EntityRegistry = registry):
        self.registry = entity_registry
        self.telemetry = Telemetry("MembershipService")

    def tiers(self) -> list[Membership]:
        """Every concrete tier, lowest first."""
        return [
            cast(Membership, variant())
            for variant in self.registry.concrete_variants()
            if issubclass(variant, Membership)
        ]

    def resolve(self, tier: TierRef) -> Membership:
        if isinstance(tier, Membership):
            return tier
        variant = self.registry.resolve(tier) if isinstance(tier, str) else tier
        if inspect.isabstract(variant):
            # Only concrete tiers answer capability questions
            raise UnknownLabelError(tier if isinstance(tier, str) else variant.__name__)
        return cast(Membership, variant())

    def _label(self, tier: Membership) -> str:
        return self.registry.label_for(tier)

    def capability(self, tier: TierRef) -> Capabilities:
        return self.resolve(tier).capabilities()

    def upgrade_paths(self, tier: TierRef) -> tuple[Membership, ...]:
        return self.resolve(tier).upgrades()

    def can_upgrade(self, current: TierRef, target: TierRef) -> bool:
        target_label = self._label(self.resolve(target))
        return any(
            self._label(option) == target_label for option in self.upgrade_paths(current)
        )

    def is_terminal(self, tier: TierRef) -> bool:
        return len(self.upgrade_paths(tier)) == 0

    def capability_matrix(self) -> dict[str, Capabilities]:
        return {self._label(tier): tier.capabilities() for tier in self.tiers()}

    @measure_time("validate_hierarchy")
    def validate_hierarchy(self) -> None:
        """
        Raises HierarchyError if a tier lists itself as an upgrade, or
        lists a tier outside the registered closed set.
        """
        self.registry.validate()
        known = {self._label(tier) for tier in self.tiers()}

        for tier in self.tiers():
            label = self._label(tier)
            for option in tier.upgrades():
                if not self.registry.is_registered(option):
                    raise HierarchyError(
                        f"{label} upgrades to unregistered {type(option).__name__}"
                    )
                target = self._label(option)
                if target == label:
                    raise HierarchyError(f"{label} lists itself as an upgrade")
                if target not in known:
                    raise HierarchyError(f"{label} upgrades to unknown tier {target}")

        self.telemetry.log_info("Tier hierarchy valid", tiers=sorted(known))
