"""
Domain Error Taxonomy

Every error the storage core raises derives from DomainError. The core
never retries or recovers: errors travel to the immediate caller, which
decides how to present them (see shared.infrastructure.drf for the HTTP
mapping).
"""


class DomainError(Exception):
    """Base class for all errors raised by the domain layer."""

    code = 'domain_error'


class InvalidRangeError(DomainError, ValueError):
    """End date is not strictly after start date."""

    code = 'invalid_range'


class WarehouseNotFoundError(DomainError, LookupError):
    """The referenced warehouse does not exist."""

    code = 'warehouse_not_found'


class UnsupportedResourceError(DomainError):
    """The warehouse does not sell the requested resource type."""

    code = 'unsupported_resource'


class QuantityOutOfRangeError(DomainError, ValueError):
    """Requested quantity is outside the schedule's orderable bounds."""

    code = 'quantity_out_of_range'

    def __init__(self, quantity, minimum=None, maximum=None):
        self.quantity = quantity
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.quantity <= 0:
            return f"Quantity must be positive, got {self.quantity}"
        if self.minimum is not None and self.quantity < self.minimum:
            return f"Quantity {self.quantity} is below the minimum of {self.minimum}"
        if self.maximum is not None and self.quantity > self.maximum:
            return f"Quantity {self.quantity} exceeds the maximum of {self.maximum}"
        return f"Quantity {self.quantity} is not orderable"


class InvalidDiscountError(DomainError, ValueError):
    """A discount percentage is outside 0-100."""

    code = 'invalid_discount'


class DataAccessError(DomainError):
    """
    Failure in the external data-access collaborator.

    The original exception is always chained (``raise ... from exc``) and
    is not interpreted any further by the core.
    """

    code = 'data_access_error'


class InsufficientCapacityError(DomainError):
    """Admission rejected: the request does not fit remaining capacity."""

    code = 'insufficient_capacity'

    def __init__(self, requested, available):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Requested {requested} but only {available} available for the selected dates"
        )


class BookingStateError(DomainError):
    """Invalid booking lifecycle transition."""

    code = 'invalid_booking_state'
