from abc import ABC, abstractmethod

from src.forum.domain.models import Membership, NodeDescriptor


class IMembershipMapper(ABC):
    """
    Contract between the membership model and an external graph mapper.
    Implementations translate, they never store.
    """

    @abstractmethod
    def describe(self, membership: Membership) -> NodeDescriptor:
        pass

    @abstractmethod
    def hydrate(self, node: NodeDescriptor) -> Membership:
        pass
