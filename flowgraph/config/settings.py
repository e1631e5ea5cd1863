"""
Runtime Settings

Environment-driven settings for the command-line entry point.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class RuntimeSettings:
    """Settings for loading and evaluating a graph"""
    config_dir: Path = Path("config")
    graph: str = "demo"
    target: Optional[str] = None  # None evaluates every sink node
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, prefix: str = "FLOWGRAPH") -> "RuntimeSettings":
        """Create settings from environment variables"""
        return cls(
            config_dir=Path(os.getenv(f"{prefix}_CONFIG_DIR", "config")),
            graph=os.getenv(f"{prefix}_GRAPH", "demo"),
            target=os.getenv(f"{prefix}_TARGET") or None,
            log_level=os.getenv(f"{prefix}_LOG_LEVEL", "INFO").upper(),
        )
