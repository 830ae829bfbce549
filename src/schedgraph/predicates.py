from __future__ import annotations

"""
Inclusion and ambiguity predicates handed to the graph builder.

Predicates may be called many times, in any order, across several graphs and
from several threads. The ones built here only capture immutable state
(tuples and frozensets), and the data store passed to an ambiguity predicate
is only read.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from .log import getLogger
from .model import ComponentId, DataStore, System

logger = getLogger(__name__)

# include_system(system) -> bool
IncludeSystemFn = Callable[[System], bool]

# include_ambiguity(system_a, system_b, conflicting_component_ids, world) -> bool
IncludeAmbiguityFn = Callable[[System, System, Sequence[ComponentId], DataStore], bool]


@dataclass(frozen=True, slots=True)
class CratePrefixFilter:
    """
    Include systems whose name starts with any of ``prefixes``.

    Plain case-sensitive ``str.startswith``; no pattern syntax.
    """

    prefixes: tuple[str, ...]

    def __call__(self, system: System) -> bool:
        # str.startswith accepts a tuple; an empty tuple never matches
        return system.name.startswith(self.prefixes)


@dataclass(frozen=True, slots=True)
class SingleAmbiguityFilter:
    """
    Hide ambiguities over exactly one component whose type is in ``types``.

    Anything else is reported: zero or several conflicting components, or a
    component the data store cannot resolve to a type.
    """

    types: frozenset[type]

    def __call__(
        self,
        system_a: System,
        system_b: System,
        conflicts: Sequence[ComponentId],
        world: DataStore,
    ) -> bool:
        if len(conflicts) != 1:
            return True

        (component_id,) = conflicts
        try:
            component_type = world.component_type(component_id)
        except LookupError:
            component_type = None

        if component_type is None:
            logger.debug(
                "Ambiguity between %s and %s on unresolved component %r kept",
                system_a.name,
                system_b.name,
                component_id,
            )
            return True

        return component_type not in self.types


def filter_in_crate(crate: str) -> CratePrefixFilter:
    """Predicate matching systems whose name starts with ``crate``."""
    return CratePrefixFilter(prefixes=(crate,))


def filter_in_crates(crates: Iterable[str]) -> CratePrefixFilter:
    """Predicate matching systems whose name starts with any of ``crates``."""
    if isinstance(crates, str):
        raise TypeError("filter_in_crates expects a collection of prefixes, not a str")
    return CratePrefixFilter(prefixes=tuple(crates))


def without_single_ambiguities_on(types: Iterable[type]) -> SingleAmbiguityFilter:
    """Predicate suppressing single-component ambiguities on ``types``."""
    return SingleAmbiguityFilter(types=frozenset(types))


__all__ = [
    "IncludeSystemFn",
    "IncludeAmbiguityFn",
    "CratePrefixFilter",
    "SingleAmbiguityFilter",
    "filter_in_crate",
    "filter_in_crates",
    "without_single_ambiguities_on",
]
