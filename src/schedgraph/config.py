from dataclasses import replace
from functools import lru_cache
from typing import Any, Iterable, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .log import getLogger
from .settings import Settings
from .style import PRESETS, EdgeStyle, RankDir, Style

logger = getLogger(__name__)


class ConfigError(RuntimeError):
    """Configuration-related error."""
    pass


# ─────────────────────────────────────────────────────────────
# Section configs
# ─────────────────────────────────────────────────────────────


class LoggingSettings(BaseModel):
    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    format: str = "%(asctime)-20s %(name)-30s %(levelname)-8s: %(message)s"


class StyleSettings(BaseModel):
    preset: str = Field(
        "dark_github",
        description="Name of the base style preset: light, dark_discord or dark_github.",
    )
    rankdir: RankDir | None = Field(
        default=None,
        description="Layout direction override (top_down / left_right).",
    )
    edge_style: EdgeStyle | None = Field(
        default=None,
        description="Edge rendering override (none, line, polyline, curved, ortho, spline).",
    )
    fontname: str | None = Field(
        default=None,
        description="Font name override.",
    )
    penwidth_edge: float | None = Field(
        default=None,
        gt=0,
        description="Edge stroke width override.",
    )

    def build(self) -> Style:
        """Resolve the preset and apply the overrides."""
        if self.preset not in PRESETS:
            raise ConfigError(
                f"Unknown style preset {self.preset!r}. "
                f"Expected one of: {', '.join(sorted(PRESETS))}."
            )
        style = Style.preset(self.preset)

        overrides: dict[str, Any] = {}
        if self.rankdir is not None:
            overrides["schedule_rankdir"] = self.rankdir
        if self.edge_style is not None:
            overrides["edge_style"] = self.edge_style
        if self.fontname is not None:
            overrides["fontname"] = self.fontname
        if self.penwidth_edge is not None:
            overrides["penwidth_edge"] = self.penwidth_edge

        if not overrides:
            return style
        return replace(style, **overrides)


class GraphSettings(BaseModel):
    include_crates: list[str] = Field(
        default_factory=list,
        description="Only include systems whose name starts with one of these prefixes (empty = all).",
    )
    collapse_single_system_sets: bool = Field(
        False,
        description="Merge sets containing a single system into that system.",
    )
    ambiguity_enable: bool = Field(
        True,
        description="Detect and draw ambiguities at all.",
    )
    ambiguity_enable_on_world: bool = Field(
        False,
        description="Also draw ambiguities caused by whole-world access.",
    )
    prettify_system_names: bool = Field(
        True,
        description="Shorten fully qualified system names for display.",
    )


# ─────────────────────────────────────────────────────────────
# Top-level settings
# ─────────────────────────────────────────────────────────────


class AppSettings(BaseSettings):
    """
    Application configuration for rendering schedule graphs.

    Precedence (highest → lowest):

    1. Init kwargs (tests/overrides)
    2. Environment variables
    3. .env and .env.local
    4. Defaults in this class
    """

    model_config = SettingsConfigDict(
        env_prefix="SCHEDGRAPH_",  # SCHEDGRAPH_STYLE__PRESET, SCHEDGRAPH_GRAPH__INCLUDE_CRATES, ...
        env_file=(".env", ".env.local"),  # .env.local overrides .env
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    app_name: str = "schedgraph"
    debug: bool = False

    logging: LoggingSettings = LoggingSettings()
    style: StyleSettings = StyleSettings()  # type: ignore[call-arg]
    graph: GraphSettings = GraphSettings()  # type: ignore[call-arg]

    def to_settings(self, ignore_ambiguities_on: Iterable[type] = ()) -> Settings:
        """
        Build the :class:`~schedgraph.settings.Settings` described by this config.

        Component types cannot come from the environment, so types whose
        single ambiguities should be hidden are passed in by the caller.
        """
        settings = Settings(
            style=self.style.build(),
            collapse_single_system_sets=self.graph.collapse_single_system_sets,
            ambiguity_enable=self.graph.ambiguity_enable,
            ambiguity_enable_on_world=self.graph.ambiguity_enable_on_world,
            prettify_system_names=self.graph.prettify_system_names,
        )

        crates = self.graph.include_crates
        if crates:
            settings = settings.filter_in_crates(crates)

        types = tuple(ignore_ambiguities_on)
        if types:
            settings = settings.without_single_ambiguities_on(types)

        logger.info(
            "Settings built: preset=%s crates=%s ambiguities=%s",
            self.style.preset,
            crates or "all",
            "on" if self.graph.ambiguity_enable else "off",
        )
        return settings


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """
    Cached accessor for process-wide settings.

    `overrides` are init kwargs → highest precedence (handy in tests).
    """
    return AppSettings(**overrides)
