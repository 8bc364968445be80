"""Error hierarchy for the catalog.

Error layers:
- CatalogError: Base class for all catalog errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: System-level failures like storage/upstream issues (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""

from collections.abc import Iterable


class CatalogError(Exception):
    """Base class for all catalog errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(CatalogError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class InvalidTransitionError(InvalidStateError):
    """Status change not present in the lifecycle transition table."""

    def __init__(self, current: str, target: str, allowed: Iterable[str]) -> None:
        self.current = current
        self.target = target
        self.allowed = sorted(allowed)
        super().__init__(
            f"Invalid status transition from {current} to {target}. "
            f"Allowed transitions: {', '.join(self.allowed) or 'none'}",
            code="INVALID_TRANSITION",
        )


class ConflictError(DomainError):
    """Resource already exists or version conflict."""


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(CatalogError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Storage backend (database) is unavailable."""


class UpstreamFailureError(InfrastructureError):
    """A search sub-strategy or index maintenance call failed."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
