"""Configuration dataclasses and YAML loading for report exports."""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import List, Optional
import yaml

from .layout_engine import DEFAULT_TIMESTAMP_FORMAT, PAGE_SIZES

FORMATS = ["pdf", "csv", "json"]
ORIENTATIONS = ["portrait", "landscape"]


@dataclass
class ExportConfig:
    """Main configuration for table exports."""

    page_size: str = "letter"  # "letter" or "a4"
    orientation: str = "portrait"  # "portrait" or "landscape"
    style: str = "DEFAULT"
    out_dir: Path = field(default_factory=lambda: Path("out"))
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT

    # Which exports the CLI writes
    formats: List[str] = field(default_factory=lambda: ["pdf"])

    # Demo data window
    seed: int = 42
    sample_start: date = field(default_factory=lambda: date(2025, 1, 1))
    sample_days: int = 30

    def __post_init__(self):
        self.page_size = str(self.page_size).lower()
        if self.page_size not in PAGE_SIZES:
            raise ValueError(f"Unknown page_size {self.page_size!r} (known: {', '.join(PAGE_SIZES)})")
        self.orientation = str(self.orientation).lower()
        if self.orientation not in ORIENTATIONS:
            raise ValueError(f"Unknown orientation {self.orientation!r} (known: {', '.join(ORIENTATIONS)})")
        for fmt in self.formats:
            if fmt not in FORMATS:
                raise ValueError(f"Unknown export format {fmt!r} (known: {', '.join(FORMATS)})")

    @classmethod
    def from_yaml(cls, path: Path) -> "ExportConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        if "sample_start" in data and isinstance(data["sample_start"], str):
            data["sample_start"] = date.fromisoformat(data["sample_start"])

        if "out_dir" in data:
            data["out_dir"] = Path(data["out_dir"])

        if "formats" in data and isinstance(data["formats"], str):
            data["formats"] = [data["formats"]]

        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        data = {
            "page_size": self.page_size,
            "orientation": self.orientation,
            "style": self.style,
            "out_dir": str(self.out_dir),
            "timestamp_format": self.timestamp_format,
            "formats": list(self.formats),
            "seed": self.seed,
            "sample_start": self.sample_start.isoformat(),
            "sample_days": self.sample_days,
        }
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_config(path: Optional[Path] = None) -> ExportConfig:
    """Load config from path or return default config."""
    if path is None:
        return ExportConfig()
    return ExportConfig.from_yaml(path)
