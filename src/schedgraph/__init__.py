"""
schedgraph
==========

Filtering and styling policy for schedule graph builders.

Public API:

- Settings                      : aggregate configuration handed to a graph builder.
- Style, RankDir, EdgeStyle     : visual theme and its layout/edge enumerations.
- filter_in_crate(s)            : system inclusion predicates by name prefix.
- without_single_ambiguities_on : ambiguity predicate hiding single-component conflicts.
- SystemInfo, ComponentRegistry : plain implementations of the System / DataStore contracts.
"""

try:
    from ._version import version as __version__  # populated by setuptools-scm
except ModuleNotFoundError:
    __version__ = "0.0.0"

from .model import ComponentInfo, ComponentRegistry, DataStore, System, SystemInfo
from .predicates import (
    IncludeAmbiguityFn,
    IncludeSystemFn,
    filter_in_crate,
    filter_in_crates,
    without_single_ambiguities_on,
)
from .settings import Settings
from .style import EDGE_COLORS, PRESETS, EdgeStyle, RankDir, Style

__all__ = [
    "__version__",
    "Settings",
    "Style",
    "RankDir",
    "EdgeStyle",
    "EDGE_COLORS",
    "PRESETS",
    "IncludeSystemFn",
    "IncludeAmbiguityFn",
    "filter_in_crate",
    "filter_in_crates",
    "without_single_ambiguities_on",
    "System",
    "DataStore",
    "SystemInfo",
    "ComponentInfo",
    "ComponentRegistry",
]
