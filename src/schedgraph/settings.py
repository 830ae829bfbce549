from __future__ import annotations

"""Settings consumed by a schedule graph builder."""

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Sequence, Union

from .log import getLogger
from .model import ComponentId, DataStore, System
from .predicates import (
    IncludeAmbiguityFn,
    IncludeSystemFn,
    filter_in_crate,
    filter_in_crates,
    without_single_ambiguities_on,
)
from .style import Style

logger = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Filtering and styling configuration for one graph rendering request.

    Settings are immutable; the builder methods return modified copies, so a
    single instance can be reused across renders and threads.

    include_system:
        When set, only systems matching the predicate are included, together
        with their ancestor sets. Honouring the ancestors is the builder's job.
    include_ambiguity:
        When set, an ambiguity is only reported if the predicate returns True
        for the pair of systems and their conflicting component ids.
    ambiguity_enable_on_world:
        Report ambiguities caused by exclusive access to the whole world.
        Off by default since they are mostly noise.
    """

    style: Style = field(default_factory=Style.default)

    include_system: Optional[IncludeSystemFn] = None
    collapse_single_system_sets: bool = False

    ambiguity_enable: bool = True
    ambiguity_enable_on_world: bool = False
    include_ambiguity: Optional[IncludeAmbiguityFn] = None

    prettify_system_names: bool = True

    # ------------------------------------------------------------------ #
    # Builder methods
    # ------------------------------------------------------------------ #

    def with_style(self, style: Union[Style, str]) -> Settings:
        """Return a copy using ``style``, either a Style or a preset name."""
        if isinstance(style, str):
            style = Style.preset(style)
        return replace(self, style=style)

    def filter_in_crate(self, crate: str) -> Settings:
        """Only include systems whose name starts with ``crate``."""
        logger.debug("Filtering systems to crate prefix %r", crate)
        return replace(self, include_system=filter_in_crate(crate))

    def filter_in_crates(self, crates: Iterable[str]) -> Settings:
        """Only include systems whose name starts with one of ``crates``."""
        predicate = filter_in_crates(crates)
        logger.debug("Filtering systems to crate prefixes %s", list(predicate.prefixes))
        return replace(self, include_system=predicate)

    def without_single_ambiguities_on(self, types: Iterable[type]) -> Settings:
        """Hide ambiguities that conflict on exactly one component of ``types``."""
        predicate = without_single_ambiguities_on(types)
        logger.debug("Ignoring single ambiguities on %s", predicate.types)
        return replace(self, include_ambiguity=predicate)

    # ------------------------------------------------------------------ #
    # Queries for the graph builder
    # ------------------------------------------------------------------ #

    def should_include_system(self, system: System) -> bool:
        if self.include_system is None:
            return True
        return bool(self.include_system(system))

    def should_include_ambiguity(
        self,
        system_a: System,
        system_b: System,
        conflicts: Sequence[ComponentId],
        world: DataStore,
        *,
        on_world: bool = False,
    ) -> bool:
        """
        Whether the builder should draw the ambiguity between two systems.

        ``on_world`` marks ambiguities caused by whole-world access rather
        than by specific components.
        """
        if not self.ambiguity_enable:
            return False
        if on_world and not self.ambiguity_enable_on_world:
            return False
        if self.include_ambiguity is None:
            return True
        return bool(self.include_ambiguity(system_a, system_b, conflicts, world))


__all__ = ["Settings"]
