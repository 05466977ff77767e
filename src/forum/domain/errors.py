class MappingError(Exception):
    """Base class for label binding and tier hierarchy errors."""


class LabelConflictError(MappingError):
    def __init__(self, label: str, existing: type, incoming: type):
        self.label = label
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Label '{label}' is already bound to {existing.__name__}, "
            f"cannot bind it to {incoming.__name__}"
        )


class UnknownLabelError(MappingError, KeyError):
    def __init__(self, labels: str | list[str], hint: str | None = None):
        self.labels = labels
        message = f"No membership variant registered for {labels!r}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class HierarchyError(MappingError):
    """Raised when a declared upgrade relation breaks the tier hierarchy."""
