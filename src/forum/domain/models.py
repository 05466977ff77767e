from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict

from src.config import MembershipConfig, Tier
from src.forum.domain.mapping import node_entity, registry


# --- Value Objects ---
class Capabilities(BaseModel):
    model_config = ConfigDict(frozen=True)

    can_post: bool
    can_comment: bool
    can_follow: bool


class NodeDescriptor(BaseModel):
    """
    What an external graph mapper sees of an entity:
    the node labels, its scalar properties and (once attached) its id.
    """

    labels: list[str]
    properties: dict[str, bool] = {}
    id: int | None = None


# --- Capability Contract ---
class IMembership(ABC):
    @abstractmethod
    def can_post(self) -> bool:
        pass

    @abstractmethod
    def can_comment(self) -> bool:
        pass

    @abstractmethod
    def can_follow(self) -> bool:
        pass

    @abstractmethod
    def upgrades(self) -> tuple["IMembership", ...]:
        """Tiers reachable from this one, in declared order."""
        pass


# --- Entities ---
@node_entity(label=MembershipConfig.BASE_LABEL)
class Membership(BaseModel, IMembership):
    """
    Abstract base of every membership tier.

    Tiers are immutable value descriptors. ``id`` is the graph identity slot
    filled in by an external mapper; capability answers never depend on it.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None

    def capabilities(self) -> Capabilities:
        return Capabilities(
            can_post=self.can_post(),
            can_comment=self.can_comment(),
            can_follow=self.can_follow(),
        )

    def label(self) -> str:
        return registry.label_for(self)

    def with_id(self, node_id: int | None) -> "Membership":
        return self.model_copy(update={"id": node_id})


@node_entity(label=Tier.BRONZE.label)
class BronzeMembership(Membership):
    def can_post(self) -> bool:
        return False

    def can_comment(self) -> bool:
        return True

    def can_follow(self) -> bool:
        return False

    def upgrades(self) -> tuple[Membership, ...]:
        return (SilverMembership(), GoldMembership(), PlatinumMembership())


@node_entity(label=Tier.SILVER.label)
class SilverMembership(Membership):
    def can_post(self) -> bool:
        return False

    def can_comment(self) -> bool:
        return True

    def can_follow(self) -> bool:
        return True

    def upgrades(self) -> tuple[Membership, ...]:
        return (GoldMembership(), PlatinumMembership())


@node_entity(label=Tier.GOLD.label)
class GoldMembership(Membership):
    def can_post(self) -> bool:
        return True

    def can_comment(self) -> bool:
        return True

    def can_follow(self) -> bool:
        return True

    def upgrades(self) -> tuple[Membership, ...]:
        return ()


@node_entity(label=Tier.PLATINUM.label)
class PlatinumMembership(Membership):
    def can_post(self) -> bool:
        return True

    def can_comment(self) -> bool:
        return True

    def can_follow(self) -> bool:
        return True

    def upgrades(self) -> tuple[Membership, ...]:
        return ()
