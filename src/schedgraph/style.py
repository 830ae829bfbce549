from __future__ import annotations

"""Visual themes for schedule graphs."""

import html
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Final, Mapping


class RankDir(Enum):
    """Layout direction of the schedule graph."""

    TOP_DOWN = "top_down"
    LEFT_RIGHT = "left_right"

    @classmethod
    def default(cls) -> RankDir:
        return cls.LEFT_RIGHT

    def as_dot(self) -> str:
        return _RANKDIR_DOT[self]


class EdgeStyle(Enum):
    """How the renderer draws edges (graphviz ``splines`` attribute)."""

    NONE = "none"
    LINE = "line"
    POLYLINE = "polyline"
    CURVED = "curved"
    ORTHO = "ortho"
    SPLINE = "spline"

    @classmethod
    def default(cls) -> EdgeStyle:
        return cls.SPLINE

    def as_dot(self) -> str:
        return _EDGE_STYLE_DOT[self]


_RANKDIR_DOT: Final[Mapping[RankDir, str]] = MappingProxyType(
    {
        RankDir.TOP_DOWN: "TD",
        RankDir.LEFT_RIGHT: "LR",
    }
)

_EDGE_STYLE_DOT: Final[Mapping[EdgeStyle, str]] = MappingProxyType(
    {
        EdgeStyle.NONE: "none",
        EdgeStyle.LINE: "line",
        EdgeStyle.POLYLINE: "polyline",
        EdgeStyle.CURVED: "curved",
        EdgeStyle.ORTHO: "ortho",
        EdgeStyle.SPLINE: "spline",
    }
)


# https://iamkate.com/data/12-bit-rainbow/ without #cc6666
EDGE_COLORS: Final[tuple[str, ...]] = (
    "#eede00",
    "#881877",
    "#00b0cc",
    "#aa3a55",
    "#44d488",
    "#0090cc",
    "#ee9e44",
    "#663699",
    "#3363bb",
    "#22c2bb",
    "#99d955",
)


@dataclass(frozen=True, slots=True)
class Style:
    """
    Immutable visual theme read by the graph builder.

    Calling ``Style()`` without arguments gives the ``dark_github`` preset.
    The remaining presets are available as classmethods or by name through
    :meth:`preset`.

    ``color_edge`` is the palette edges cycle through when several edges need
    distinct colors; its order defines the cycling sequence.
    """

    schedule_rankdir: RankDir = RankDir.LEFT_RIGHT
    edge_style: EdgeStyle = EdgeStyle.SPLINE

    fontname: str = "Helvetica"

    color_background: str = "#0d1117"
    color_system: str = "#eff1f3"
    color_system_border: str = "#eff1f3"
    color_set: str = "#6f90ad"
    color_set_border: str = "black"
    color_edge: tuple[str, ...] = EDGE_COLORS
    multiple_set_edge_color: str = "blue"

    ambiguity_color: str = "#c93526"
    ambiguity_bgcolor: str = "#c6e6ff"

    penwidth_edge: float = 2.0

    def __post_init__(self) -> None:
        if isinstance(self.color_edge, str):
            raise TypeError("color_edge expects a sequence of colors, not a str")
        if not isinstance(self.color_edge, tuple):
            object.__setattr__(self, "color_edge", tuple(self.color_edge))

    # ------------------------------------------------------------------ #
    # Presets
    # ------------------------------------------------------------------ #

    @classmethod
    def light(cls) -> Style:
        return cls(
            schedule_rankdir=RankDir.default(),
            edge_style=EdgeStyle.default(),
            fontname="Helvetica",
            color_background="white",
            color_system="white",
            color_system_border="black",
            color_set="white",
            color_set_border="black",
            color_edge=EDGE_COLORS,
            multiple_set_edge_color="blue",
            ambiguity_color="#c93526",
            ambiguity_bgcolor="#d3d3d3",
            penwidth_edge=2.0,
        )

    @classmethod
    def dark_discord(cls) -> Style:
        """Theme matching the Discord dark mode embed background."""
        return cls(
            schedule_rankdir=RankDir.default(),
            edge_style=EdgeStyle.default(),
            fontname="Helvetica",
            color_background="#35393f",
            color_system="#eff1f3",
            color_system_border="#eff1f3",
            color_set="#99aab5",
            color_set_border="black",
            color_edge=EDGE_COLORS,
            multiple_set_edge_color="blue",
            ambiguity_color="#c93526",
            ambiguity_bgcolor="#c5daeb",
            penwidth_edge=2.0,
        )

    @classmethod
    def dark_github(cls) -> Style:
        """Theme matching GitHub's dark mode background."""
        return cls(
            schedule_rankdir=RankDir.default(),
            edge_style=EdgeStyle.default(),
            fontname="Helvetica",
            color_background="#0d1117",
            color_system="#eff1f3",
            color_system_border="#eff1f3",
            color_set="#6f90ad",
            color_set_border="black",
            color_edge=EDGE_COLORS,
            multiple_set_edge_color="blue",
            ambiguity_color="#c93526",
            ambiguity_bgcolor="#c6e6ff",
            penwidth_edge=2.0,
        )

    @classmethod
    def default(cls) -> Style:
        return cls.dark_github()

    @classmethod
    def preset(cls, name: str) -> Style:
        """
        Return the preset called ``name``.

        Raises
        ------
        KeyError
            If ``name`` is not one of :data:`PRESETS`.
        """
        try:
            factory = _PRESET_FACTORIES[name]
        except KeyError as exc:
            raise KeyError(
                f"Unknown style preset {name!r}; expected one of {sorted(PRESETS)}"
            ) from exc
        return factory()

    # ------------------------------------------------------------------ #
    # Renderer attributes
    # ------------------------------------------------------------------ #

    def edge_color(self, index: int) -> str:
        """
        Color for the ``index``-th edge of a node that needs distinct edge colors.

        Cycles through ``color_edge``. An empty palette falls back to
        ``multiple_set_edge_color``.
        """
        if not self.color_edge:
            return self.multiple_set_edge_color
        return self.color_edge[index % len(self.color_edge)]

    def graph_attributes(self) -> dict[str, str]:
        return {
            "rankdir": self.schedule_rankdir.as_dot(),
            "splines": self.edge_style.as_dot(),
            "bgcolor": self.color_background,
            "fontname": self.fontname,
        }

    def system_attributes(self) -> dict[str, str]:
        return {
            "shape": "box",
            "style": "filled",
            "fillcolor": self.color_system,
            "color": self.color_system_border,
            "fontname": self.fontname,
        }

    def set_attributes(self) -> dict[str, str]:
        return {
            "style": "rounded,filled",
            "fillcolor": self.color_set,
            "color": self.color_set_border,
            "fontname": self.fontname,
        }

    def edge_attributes(self, index: int = 0) -> dict[str, str]:
        return {
            "color": self.edge_color(index),
            "penwidth": _format_number(self.penwidth_edge),
        }

    def ambiguity_attributes(self) -> dict[str, str]:
        """Attributes for an edge that highlights a data-access ambiguity."""
        return {
            "color": self.ambiguity_color,
            "fontcolor": self.ambiguity_color,
            "style": "dashed",
            "dir": "none",
            "penwidth": _format_number(self.penwidth_edge),
        }

    def ambiguity_label(self, text: str) -> str:
        """
        HTML-like label for an ambiguity edge, drawn on ``ambiguity_bgcolor``.

        Pass the result as the edge's ``label`` attribute; ``text`` is escaped.
        """
        return (
            f'<<TABLE BORDER="0" CELLBORDER="0" BGCOLOR="{self.ambiguity_bgcolor}">'
            f"<TR><TD>{html.escape(text)}</TD></TR></TABLE>>"
        )


def _format_number(value: float) -> str:
    # 2.0 -> "2", 1.5 -> "1.5"
    return f"{value:g}"


_PRESET_FACTORIES: Final[Mapping[str, Callable[[], Style]]] = MappingProxyType(
    {
        "light": Style.light,
        "dark_discord": Style.dark_discord,
        "dark_github": Style.dark_github,
    }
)

PRESETS: Final[frozenset[str]] = frozenset(_PRESET_FACTORIES)

__all__ = ["RankDir", "EdgeStyle", "Style", "EDGE_COLORS", "PRESETS"]
