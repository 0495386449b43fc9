"""Configuration loading for the algorithm visualizer."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, model_validator

CONFIG_ENV_VAR = "ALGOVIZ_CONFIG"
DEFAULT_CONFIG_NAME = "algoviz.yaml"


class SortingConfig(BaseModel):
    default_size: int = 20
    min_size: int = 5
    max_size: int = 100
    min_value: int = 1
    max_value: int = 100
    default_algorithm: str = "bubble"

    @model_validator(mode="after")
    def _check_bounds(self) -> "SortingConfig":
        if not self.min_size <= self.default_size <= self.max_size:
            raise ValueError("default_size must lie within [min_size, max_size]")
        if self.min_value > self.max_value:
            raise ValueError("min_value must not exceed max_value")
        return self


class SearchingConfig(BaseModel):
    size: int = Field(20, ge=1, le=100)
    min_value: int = 0
    max_value: int = 99
    default_algorithm: str = "linear"


class GraphConfig(BaseModel):
    default_nodes: int = 7
    min_nodes: int = 4
    max_nodes: int = 12
    center_x: float = 300.0
    center_y: float = 200.0
    radius: float = 150.0
    min_weight: int = Field(1, ge=0)   # Dijkstra needs non-negative weights
    max_weight: int = 9
    extra_link_probability: float = Field(0.5, ge=0.0, le=1.0)
    default_algorithm: str = "bfs"

    @model_validator(mode="after")
    def _check_bounds(self) -> "GraphConfig":
        if not self.min_nodes <= self.default_nodes <= self.max_nodes:
            raise ValueError("default_nodes must lie within [min_nodes, max_nodes]")
        if self.min_weight > self.max_weight:
            raise ValueError("min_weight must not exceed max_weight")
        return self


class PlaybackConfig(BaseModel):
    min_delay_ms: int = 10
    max_delay_ms: int = 2000
    poll_interval: float = Field(0.05, gt=0)
    default_delay_ms: Optional[int] = None  # None: each algorithm's own pacing


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False


class Config(BaseModel):
    seed: Optional[int] = None   # fixes every random array / graph when set
    sorting: SortingConfig = Field(default_factory=SortingConfig)
    searching: SearchingConfig = Field(default_factory=SearchingConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load config from YAML.  Without an explicit path, $ALGOVIZ_CONFIG is
    used, then ./algoviz.yaml.  Falls back to defaults if the file is missing.
    """
    if config_path is None:
        config_path = Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_NAME))
    config_path = Path(config_path)

    if config_path.exists():
        raw: Dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
        return Config(**raw)

    return Config()
