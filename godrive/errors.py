"""Error types raised by the GoDrive core."""


class GoDriveError(Exception):
    """Base class for every error raised by GoDrive."""
    pass


class NotFoundError(GoDriveError):
    """A referenced user or ride does not exist, or exists under another role."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} with ID {entity_id} not found")


class AlreadyExistsError(GoDriveError):
    """A create was called with an id that is already stored."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} with ID {entity_id} already exists")


class InvalidTransitionError(GoDriveError):
    """A ride lifecycle method was called outside its legal source state."""

    def __init__(self, current_status, action: str):
        self.current_status = current_status
        self.action = action
        status = getattr(current_status, "value", current_status)
        super().__init__(f"Cannot {action} ride with status {status}")


class InvalidArgumentError(GoDriveError):
    """An argument failed validation."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class StorageError(GoDriveError):
    """The storage backend could not complete a request."""
    pass
