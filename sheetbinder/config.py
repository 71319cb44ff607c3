"""Application configuration."""
import os
from typing import List
from dataclasses import dataclass, field

from sheetbinder.domain.exceptions import ConfigurationError


@dataclass
class BinderConfig:
    """Entity assembly configuration."""
    max_depth: int = 32


@dataclass
class ExtractionConfig:
    """Cell value conversion configuration."""
    date_formats: List[str] = field(
        default_factory=lambda: ["%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%Y/%m/%d"]
    )
    true_values: List[str] = field(default_factory=lambda: ["true", "yes", "y", "1"])
    false_values: List[str] = field(default_factory=lambda: ["false", "no", "n", "0"])


class Config:
    """Application configuration."""

    def __init__(self):
        self._binder_config = None
        self._extraction_config = None

    @property
    def binder(self) -> BinderConfig:
        """Get entity assembly configuration."""
        if self._binder_config is None:
            raw = os.getenv("SHEETBINDER_MAX_DEPTH")
            if raw is None:
                self._binder_config = BinderConfig()
            else:
                try:
                    max_depth = int(raw)
                except ValueError:
                    raise ConfigurationError(f"SHEETBINDER_MAX_DEPTH must be an integer, got {raw!r}")
                if max_depth < 1:
                    raise ConfigurationError("SHEETBINDER_MAX_DEPTH must be at least 1")
                self._binder_config = BinderConfig(max_depth=max_depth)
        return self._binder_config

    @property
    def extraction(self) -> ExtractionConfig:
        """Get cell value conversion configuration."""
        if self._extraction_config is None:
            raw = os.getenv("SHEETBINDER_DATE_FORMATS")
            if raw:
                formats = [fmt.strip() for fmt in raw.split(",") if fmt.strip()]
                self._extraction_config = ExtractionConfig(date_formats=formats)
            else:
                self._extraction_config = ExtractionConfig()
        return self._extraction_config


# Global configuration instance
config = Config()
