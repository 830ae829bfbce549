from __future__ import annotations

"""Contracts for the scheduler objects that predicates observe."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Hashable, Iterable, Mapping, Optional, Protocol, runtime_checkable

# Opaque identifier of a component/resource inside a data store.
ComponentId = Hashable


@runtime_checkable
class System(Protocol):
    """A named unit of work, as exposed by the host scheduler."""

    @property
    def name(self) -> str:
        """Fully qualified system name, e.g. ``game::physics::integrate``."""


@runtime_checkable
class DataStore(Protocol):
    """Read-only view of the data store (world) holding typed components."""

    def component_type(self, component_id: ComponentId) -> Optional[type]:
        """
        Resolve ``component_id`` to the Python type it was registered with.

        Returns ``None`` when the id is unknown or has no associated type.
        """


@dataclass(frozen=True, slots=True)
class SystemInfo:
    """
    Plain system description satisfying :class:`System`.

    ``reads`` / ``writes`` hold the component ids the system accesses.
    """

    name: str
    reads: frozenset[ComponentId] = field(default_factory=frozenset)
    writes: frozenset[ComponentId] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "reads", frozenset(self.reads))
        object.__setattr__(self, "writes", frozenset(self.writes))


@dataclass(frozen=True, slots=True)
class ComponentInfo:
    component_id: ComponentId
    name: str
    type_: Optional[type] = None


class ComponentRegistry:
    """
    Minimal in-memory :class:`DataStore`.

    Components are registered once; afterwards the registry is only read,
    so it can be shared between threads evaluating predicates.
    """

    __slots__ = ("_components",)

    def __init__(self, components: Iterable[ComponentInfo] = ()) -> None:
        table: dict[ComponentId, ComponentInfo] = {}
        for info in components:
            if info.component_id in table:
                raise ValueError(f"Duplicate component id {info.component_id!r}")
            table[info.component_id] = info
        self._components: Mapping[ComponentId, ComponentInfo] = MappingProxyType(table)

    @classmethod
    def from_types(cls, *types: type) -> ComponentRegistry:
        """Register ``types`` under consecutive integer ids starting at 0."""
        return cls(
            ComponentInfo(component_id=idx, name=t.__qualname__, type_=t)
            for idx, t in enumerate(types)
        )

    def get_info(self, component_id: ComponentId) -> Optional[ComponentInfo]:
        return self._components.get(component_id)

    def component_type(self, component_id: ComponentId) -> Optional[type]:
        info = self._components.get(component_id)
        if info is None:
            return None
        return info.type_

    def id_of(self, type_: type) -> ComponentId:
        for info in self._components.values():
            if info.type_ is type_:
                return info.component_id
        raise KeyError(f"{type_.__qualname__} is not registered")

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._components


__all__ = [
    "ComponentId",
    "System",
    "DataStore",
    "SystemInfo",
    "ComponentInfo",
    "ComponentRegistry",
]
