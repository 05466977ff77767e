from typing import cast

from src.config import MembershipConfig
from src.forum.domain.mapping import EntityRegistry, registry
from src.forum.domain.models import Membership, NodeDescriptor
from src.forum.domain.ports import IMembershipMapper
from src.shared.telemetry import Telemetry, measure_time


class ReflectiveNodeMapper(IMembershipMapper):
    """
    Reads tiers through their declared accessors and label bindings.
    Stored node properties are informational only: the variant's own
    answers always win.
    """

    def __init__(self, entity_registry: EntityRegistry = registry) -> None:
        self.telemetry = Telemetry("ReflectiveNodeMapper")
        self.registry = entity_registry

    @measure_time("describe_node")
    def describe(self, membership: Membership) -> NodeDescriptor:
        return NodeDescriptor(
            labels=self.registry.labels_for(membership),
            properties=self._read_properties(membership),
            id=membership.id,
        )

    @measure_time("hydrate_node")
    def hydrate(self, node: NodeDescriptor) -> Membership:
        variant = self.registry.resolve_labels(node.labels)
        membership = cast(Membership, variant(id=node.id))

        declared = self._read_properties(membership)
        drifted = {
            key: value
            for key, value in node.properties.items()
            if key in declared and declared[key] != value
        }
        if drifted:
            self.telemetry.log_warning(
                "Stored capabilities differ from declared ones",
                label=self.registry.label_for(membership),
                node_id=node.id,
                stored=drifted,
            )

        return membership

    @staticmethod
    def _read_properties(membership: Membership) -> dict[str, bool]:
        answers = (membership.can_post(), membership.can_comment(), membership.can_follow())
        return dict(zip(MembershipConfig.property_keys(), answers))
