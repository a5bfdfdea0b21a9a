"""
Error kinds raised by the POS engine

Precondition errors (ValidationError, NotFound, InsufficientStock) are raised
before any state change. TransportFailure is raised by data sources and is
reported asynchronously when it happens during a best-effort write.

Author: TM3
Date: 2026-10-19
"""


class PosError(Exception):
    """Base class for every error raised by the POS engine"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(PosError):
    """Malformed or missing required input. No mutation was applied."""


class InvalidStatusTransition(ValidationError):
    """Requested order status change is not allowed from the current status"""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot move order from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


class NotFound(PosError):
    """Referenced id does not resolve"""

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InsufficientStock(PosError):
    """Requested quantity exceeds the available stock"""

    def __init__(self, product_name: str, available: int, requested: int):
        super().__init__(
            f"Only {available} units of {product_name} available (requested {requested})"
        )
        self.product_name = product_name
        self.available = available
        self.requested = requested


class InvalidCredentials(PosError):
    """Login rejected"""


class NotAuthenticated(PosError):
    """Operation needs an active session"""


class PermissionDenied(PosError):
    """Active session lacks the capability for this operation"""


class TransportFailure(PosError):
    """Durable write or remote call failed"""
