import os
from enum import Enum
from typing import Final


class Tier(Enum):
    # Enum Member = "Node Label", lowest tier first
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def all_labels(cls) -> list[str]:
        """Returns a list of all tier labels, lowest tier first."""
        return [t.label for t in cls]


class MembershipConfig:
    # --- Graph Labels ---
    BASE_LABEL: Final[str] = "Membership"

    # --- Node Property Keys ---
    # Keys used verbatim by the mapper when describing a tier as a node
    PROP_CAN_POST: Final[str] = "canPost"
    PROP_CAN_COMMENT: Final[str] = "canComment"
    PROP_CAN_FOLLOW: Final[str] = "canFollow"

    # --- Observability ---
    LOG_LEVEL: str = os.getenv("FORUM_LOG_LEVEL", "INFO").upper()
    METRICS_PORT: int = int(os.getenv("FORUM_METRICS_PORT", "8000"))
    SERVICE_NAME: Final[str] = "forum-membership"

    @staticmethod
    def property_keys() -> list[str]:
        """Capability property keys in the order they are written to a node."""
        return [
            MembershipConfig.PROP_CAN_POST,
            MembershipConfig.PROP_CAN_COMMENT,
            MembershipConfig.PROP_CAN_FOLLOW,
        ]
