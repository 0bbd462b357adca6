"""Domain-specific exceptions."""

from __future__ import annotations

from typing import Any, Optional


class BanklinkError(Exception):
    """Base class for every error raised by the banklink library."""


class MissingFieldError(BanklinkError):
    """Raised when a field required by a service hash definition is absent."""

    def __init__(self, service_id: Any, field_name: str) -> None:
        self.service_id = service_id
        self.field_name = field_name
        super().__init__(
            f"Cannot generate {service_id} service hash without {field_name} field"
        )


class UnsupportedServiceError(BanklinkError):
    """Raised when a service id is unknown or not usable for the operation."""

    def __init__(self, service_id: Any) -> None:
        self.service_id = service_id
        super().__init__(f"Unsupported service with id: {service_id}")


class FieldTooLongError(BanklinkError):
    """Raised when a value cannot be length-prefixed with three digits."""

    def __init__(self, field_name: str, length: int) -> None:
        self.field_name = field_name
        self.length = length
        super().__init__(
            f"Field {field_name} is {length} bytes long, at most 999 bytes are allowed"
        )


class KeyLoadError(BanklinkError):
    """Raised when private or public key material cannot be loaded."""


class InvalidFieldValueError(BanklinkError):
    """Raised when a field value cannot be encoded, parsed or accepted."""

    def __init__(
        self, field_name: str, value: Any, reason: Optional[str] = None
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.reason = reason
        message = f"Invalid value for field {field_name}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
