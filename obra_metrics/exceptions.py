"""Custom exception hierarchy for obra-metrics."""


class ObraError(Exception):
    """Base exception for all obra-metrics errors."""


class EntityNotFoundError(ObraError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidEntityStateError(ObraError):
    """Raised when an entity is in an invalid state for the operation."""


class ValidationError(ObraError):
    """Raised when data entered at the store boundary is malformed."""


class ConfigurationError(ObraError):
    """Raised when configuration is invalid or missing."""


class InflationSourceError(ObraError):
    """Raised when the inflation index cannot be fetched or parsed."""


class SinkError(ObraError):
    """Raised when a sink operation fails."""
