"""Configuration management for catalog-lineage."""

from enum import Enum
from pathlib import Path
from typing import Optional
import yaml
from pydantic import BaseModel, Field, field_validator


class EdgeKey(str, Enum):
    """Which edge fields decide that two edges are duplicates."""

    ENDPOINTS = "endpoints"
    ENDPOINTS_AND_LOGIC = "endpoints_and_logic"


class LayoutConfig(BaseModel):
    """Pixel constants and dedup policy for the layout pass."""

    base_x: float = 50.0
    center_y: float = 300.0
    column_spacing: float = 250.0
    row_spacing: float = 120.0
    edge_key: EdgeKey = EdgeKey.ENDPOINTS

    @field_validator("column_spacing", "row_spacing")
    @classmethod
    def spacing_must_be_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("spacing must be positive")
        return value


class SourceConfig(BaseModel):
    """Where lineage snapshots are fetched from."""

    api_base_url: Optional[str] = None
    timeout: float = 10.0
    database_url: Optional[str] = None


class ExportConfig(BaseModel):
    """Export configuration."""

    json_output: bool = Field(default=True, alias="json")
    csv: bool = True
    html: bool = True

    model_config = {"populate_by_name": True}


class CatalogLineageConfig(BaseModel):
    """Main catalog-lineage configuration."""

    output_dir: str = "output"
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "CatalogLineageConfig":
        """Load configuration from YAML file."""
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def load_default(cls) -> "CatalogLineageConfig":
        """Load default configuration."""
        return cls()

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        with open(config_path, "w") as f:
            yaml.dump(
                self.model_dump(mode="json", by_alias=True),
                f,
                default_flow_style=False
            )


def load_config(config_path: Optional[str] = None) -> CatalogLineageConfig:
    """Load configuration from file or defaults."""
    if config_path:
        return CatalogLineageConfig.load_from_file(Path(config_path))

    standard_paths = [
        Path("catalog_lineage.yaml"),
        Path("config/catalog_lineage.yaml"),
        Path.home() / ".catalog_lineage" / "config.yaml"
    ]

    for path in standard_paths:
        if path.exists():
            return CatalogLineageConfig.load_from_file(path)

    return CatalogLineageConfig.load_default()
