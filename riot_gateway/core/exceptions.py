"""
Service layer custom exceptions.

Input validation and identity resolution failures. Remote API failures live in
``riot_gateway.core.riot_api.errors`` and are never wrapped by these classes.
"""

from typing import Any, Dict, Iterable, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.operation = operation
        self.context = context or {}

    def __str__(self) -> str:
        if self.service and self.operation:
            return f"[{self.service}.{self.operation}] {self.message}"
        return self.message


class ValidationError(ServiceException):
    """Exception raised for input validation errors, before any network call."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        validation_context = context or {}
        if field:
            validation_context["field"] = field
        if value is not None:
            validation_context["value"] = str(value)

        super().__init__(
            message=message,
            service=service,
            operation=operation,
            context=validation_context,
        )
        self.field = field
        self.value = value


class InvalidRegionError(ValidationError):
    """Region code is not present in the region directory."""

    def __init__(self, region: str, supported: Iterable[str]):
        self.supported = sorted(supported)
        super().__init__(
            message=f"Invalid region: {region}. Supported regions: {', '.join(self.supported)}",
            field="region",
            value=region,
        )
        self.region = region


class InvalidIdentityFormatError(ValidationError):
    """Player handle is neither a valid ``gameName#tagLine`` nor a legacy name."""

    def __init__(self, handle: str, reason: str):
        super().__init__(
            message=f'Invalid player handle "{handle}": {reason}',
            field="handle",
            value=handle,
        )
        self.handle = handle
        self.reason = reason


class IdentityNotResolvedError(ServiceException):
    """A bare player name matched none of the candidate tag lines."""

    def __init__(self, handle: str, region: str, tried_tag_lines: Iterable[str]):
        self.handle = handle
        self.region = region
        self.tried_tag_lines = list(tried_tag_lines)
        super().__init__(
            message=(
                f'Summoner "{handle}" not found. Please use full Riot ID format: '
                'gameName#tagLine (e.g., "Faker#KR1")'
            ),
            service="IdentityResolver",
            operation="resolve",
            context={
                "handle": handle,
                "region": region,
                "tried_tag_lines": self.tried_tag_lines,
            },
        )
