"""
Config Module

YAML graph definition loading and runtime settings.
"""

from .loader import ConfigLoader, GraphConfig, NodeConfig, EdgeConfig, PositionConfig
from .settings import RuntimeSettings

__all__ = [
    "ConfigLoader",
    "GraphConfig",
    "NodeConfig",
    "EdgeConfig",
    "PositionConfig",
    "RuntimeSettings",
]
