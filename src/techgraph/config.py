"""
Global Configuration and Defaults.

Module-level constants are the defaults; `TechGraphConfig` groups them
into sections that can be overridden from `.techgraph/config.yaml`.
"""

from enum import StrEnum
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .core.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path(".techgraph/config.yaml")

# --- Viewport ---
VIEWPORT_WIDTH = 1920
VIEWPORT_HEIGHT = 1080

# Radius of the initial circular arrangement
ARRANGE_RADIUS = 600.0

# --- Dataset ---

# Record types that never become nodes (file formats are listed in the
# dataset for reference only)
EXCLUDED_TYPES: List[str] = ["filformat"]

COMPANY_COLOR = "#1E40AF"
FALLBACK_COLOR = "#ccc"

COLOR_PALETTE: List[str] = [
    "#7AC8A4",  # green
    "#FFA07A",  # coral
    "#87CEFA",  # light blue
    "#FFD700",  # yellow
    "#DDA0DD",  # light purple
    "#D3D3D3",  # grey
    "#ADD8E6",  # blue grey
    "#90EE90",  # light green
    "#F08080",  # pink red
    "#B0C4DE",  # steel blue
    "#FFB6C1",  # light pink
]

# --- Highlighting ---
SECOND_HOP_NODE_OPACITY = 0.5
SECOND_HOP_EDGE_OPACITY = 0.35
DIMMED_NODE_OPACITY = 0.1
DIMMED_EDGE_OPACITY = 0.05

# --- Force layout ---
LAYOUT_ENGINE = "networkx"
SPRING_ITERATIONS = 1
CHARGE_STRENGTH = -1200.0
CENTERING_BASE_STRENGTH = 0.075
ASPECT_FACTOR = 0.8
LINK_STRENGTH = 0.05
LINK_DISTANCE = 100.0
COLLIDE_STRENGTH = 0.7
ALPHA_TARGET = 0.05
ALPHA_DECAY = 0.0228
VELOCITY_DECAY = 0.4


class LayoutEngine(StrEnum):
    NETWORKX = "networkx"
    SIMPLE = "simple"


class ViewportSettings(BaseModel):
    width: float = VIEWPORT_WIDTH
    height: float = VIEWPORT_HEIGHT
    arrange_radius: float = ARRANGE_RADIUS

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height if self.height else 1.0


class DatasetSettings(BaseModel):
    excluded_types: List[str] = Field(default_factory=lambda: list(EXCLUDED_TYPES))
    company_color: str = COMPANY_COLOR
    fallback_color: str = FALLBACK_COLOR
    palette: List[str] = Field(default_factory=lambda: list(COLOR_PALETTE))


class HighlightSettings(BaseModel):
    second_hop_node_opacity: float = SECOND_HOP_NODE_OPACITY
    second_hop_edge_opacity: float = SECOND_HOP_EDGE_OPACITY
    dimmed_node_opacity: float = DIMMED_NODE_OPACITY
    dimmed_edge_opacity: float = DIMMED_EDGE_OPACITY


class LayoutSettings(BaseModel):
    engine: LayoutEngine = LayoutEngine(LAYOUT_ENGINE)
    spring_iterations: int = Field(default=SPRING_ITERATIONS, ge=1)
    charge_strength: float = CHARGE_STRENGTH
    centering_base_strength: float = CENTERING_BASE_STRENGTH
    aspect_factor: float = ASPECT_FACTOR
    link_strength: float = LINK_STRENGTH
    link_distance: float = LINK_DISTANCE
    collide_strength: float = COLLIDE_STRENGTH
    alpha_target: float = ALPHA_TARGET
    alpha_decay: float = ALPHA_DECAY
    velocity_decay: float = VELOCITY_DECAY


class TechGraphConfig(BaseModel):
    """Top-level configuration, one section per concern."""
    viewport: ViewportSettings = Field(default_factory=ViewportSettings)
    dataset: DatasetSettings = Field(default_factory=DatasetSettings)
    highlight: HighlightSettings = Field(default_factory=HighlightSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.model_dump(mode="json"), sort_keys=False)


def load_config(path: Optional[Path] = None) -> TechGraphConfig:
    """
    Load configuration from a YAML file.

    A missing file yields the defaults. Unreadable or invalid content
    raises ConfigError.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        return TechGraphConfig()

    try:
        raw: Any = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(str(config_path), str(e)) from e

    if raw is None:
        return TechGraphConfig()
    if not isinstance(raw, dict):
        raise ConfigError(str(config_path), "top level must be a mapping")

    try:
        return TechGraphConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(str(config_path), str(e)) from e


def write_default_config(path: Path) -> Path:
    """Write the default configuration file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(TechGraphConfig().to_yaml(), encoding="utf-8")
    return path
