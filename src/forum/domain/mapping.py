import inspect
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from src.forum.domain.errors import LabelConflictError, MappingError, UnknownLabelError

T = TypeVar("T", bound=type)

LABEL_ATTR = "__node_label__"


class EntityRegistry:
    """
    Explicit label registration map for node entities.

    Replaces annotation discovery: every decorated class is recorded here
    once, at import time, and the mapper only ever asks this map.
    """

    def __init__(self) -> None:
        self._by_label: dict[str, type] = {}
        self._by_class: dict[type, str] = {}

    def register(self, cls: type, label: str) -> None:
        if not label or not label.strip():
            raise MappingError(f"{cls.__name__} must declare a non-empty label")

        existing = self._by_label.get(label)
        if existing is not None and existing is not cls:
            raise LabelConflictError(label, existing, cls)

        self._by_label[label] = cls
        self._by_class[cls] = label

    def is_registered(self, cls_or_instance: Any) -> bool:
        return _as_class(cls_or_instance) in self._by_class

    def label_for(self, cls_or_instance: Any) -> str:
        """
        The label declared directly on the class.

        Only the registry is authoritative: ``__node_label__`` is inherited by
        undecorated subclasses and is informational.
        """
        cls = _as_class(cls_or_instance)
        try:
            return self._by_class[cls]
        except KeyError:
            inherited = getattr(cls, LABEL_ATTR, None)
            hint = (
                f"inherits '{inherited}' but is not decorated with node_entity"
                if inherited
                else None
            )
            raise UnknownLabelError(cls.__name__, hint) from None

    def labels_for(self, cls_or_instance: Any) -> list[str]:
        """
        All registered labels along the class hierarchy, base first.

        Example:
            >>> registry.labels_for(GoldMembership())
            ['Membership', 'Gold']
        """
        cls = _as_class(cls_or_instance)
        labels = [
            self._by_class[klass]
            for klass in reversed(cls.__mro__)
            if klass in self._by_class
        ]
        if not labels:
            raise UnknownLabelError(cls.__name__)
        return labels

    def resolve(self, label: str) -> type:
        try:
            return self._by_label[label]
        except KeyError:
            raise UnknownLabelError(label) from None

    def resolve_labels(self, labels: Iterable[str]) -> type:
        """
        Picks the single concrete variant named by a node's label set.
        Unregistered labels are ignored.
        """
        labels = list(labels)
        # A node may repeat a label; dedupe keeping first-seen order
        candidates = [
            cls
            for cls in dict.fromkeys(
                self._by_label[label] for label in labels if label in self._by_label
            )
            if not inspect.isabstract(cls)
        ]
        if not candidates:
            raise UnknownLabelError(labels)

        # Keep only the most specific classes
        most_specific = [
            c for c in candidates
            if not any(other is not c and issubclass(other, c) for other in candidates)
        ]
        if len(most_specific) > 1:
            names = ", ".join(c.__name__ for c in most_specific)
            raise MappingError(f"Labels {labels!r} match unrelated variants: {names}")
        return most_specific[0]

    def concrete_variants(self) -> list[type]:
        """Registered non-abstract classes, in registration order."""
        return [c for c in self._by_label.values() if not inspect.isabstract(c)]

    def validate(self) -> None:
        """Checks that the two directions of the map agree."""
        for label, cls in self._by_label.items():
            if self._by_class.get(cls) != label:
                raise MappingError(
                    f"Registry out of sync for '{label}' ({cls.__name__})"
                )

    def __contains__(self, label: object) -> bool:
        return label in self._by_label

    def __len__(self) -> int:
        return len(self._by_label)


def _as_class(cls_or_instance: Any) -> type:
    return cls_or_instance if isinstance(cls_or_instance, type) else type(cls_or_instance)


# Default registry used by the domain model
registry = EntityRegistry()


def node_entity(
    label: str | None = None, *, registry: EntityRegistry = registry
) -> Callable[[T], T]:
    """
    Class decorator binding a graph node label to an entity class.
    Without an explicit label the class name is used.
    """

    def decorator(cls: T) -> T:
        bound = cls.__name__ if label is None else label
        registry.register(cls, bound)
        setattr(cls, LABEL_ATTR, bound)
        return cls

    return decorator
