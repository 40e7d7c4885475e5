"""Exceptions raised by the delivery validation core and its repositories.

Business outcomes (address out of area, minimum order not met) are not
exceptions; they are returned as ``ValidationResult`` values.
"""


class DeliveryValidationError(Exception):
    """Base class for system-level delivery validation failures."""


class ConfigurationError(DeliveryValidationError):
    """Restaurant data is incomplete (e.g. no origin coordinate)."""


class InvalidGeometryError(DeliveryValidationError, ValueError):
    """A zone geometry cannot be evaluated."""


class RestaurantNotFoundError(DeliveryValidationError, LookupError):
    pass


class RepositoryUnavailableError(DeliveryValidationError, ConnectionError):
    """The backing store is not configured or a query failed."""
