"""Service registry: which fields each protocol service hashes, and in what order."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import UnsupportedServiceError


class ServiceDescriptor(BaseModel):
    """Immutable (service id, ordered hash fields) pair."""

    model_config = ConfigDict(frozen=True)

    service_id: str = Field(..., min_length=1)
    fields: tuple[str, ...]
    is_payment: bool = False

    @field_validator("fields")
    @classmethod
    def validate_fields(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("Service descriptor needs at least one hash field")
        if len(set(value)) != len(value):
            raise ValueError("Service descriptor hash fields must be unique")
        return value


class ServiceRegistry:
    """Read-only lookup table of service descriptors keyed by service id.

    A registry is built once and then passed to the components that need it.
    It offers no mutators; ``with_descriptor`` returns a new registry.
    """

    __slots__ = ("_descriptors",)

    def __init__(self, descriptors: Iterable[ServiceDescriptor]) -> None:
        table: dict[str, ServiceDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.service_id in table:
                raise ValueError(
                    f"Duplicate service descriptor for id {descriptor.service_id}"
                )
            table[descriptor.service_id] = descriptor
        self._descriptors = MappingProxyType(table)

    def get(self, service_id: object) -> ServiceDescriptor:
        """Return the descriptor for ``service_id`` or raise UnsupportedServiceError."""
        descriptor = self._descriptors.get(str(service_id))
        if descriptor is None:
            raise UnsupportedServiceError(service_id)
        return descriptor

    def fields_for(self, service_id: object) -> tuple[str, ...]:
        return self.get(service_id).fields

    def is_payment_service(self, service_id: object) -> bool:
        descriptor = self._descriptors.get(str(service_id))
        return descriptor is not None and descriptor.is_payment

    def payment_services(self) -> frozenset[str]:
        return frozenset(
            service_id
            for service_id, descriptor in self._descriptors.items()
            if descriptor.is_payment
        )

    def with_descriptor(self, descriptor: ServiceDescriptor) -> "ServiceRegistry":
        """Return a new registry with ``descriptor`` added or replacing its id."""
        merged = dict(self._descriptors)
        merged[descriptor.service_id] = descriptor
        return ServiceRegistry(merged.values())

    def __contains__(self, service_id: object) -> bool:
        return str(service_id) in self._descriptors

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return f"ServiceRegistry({sorted(self._descriptors)!r})"
