"""
Config Loader

Loads dataflow graph definitions from YAML files.
A graph is either a single file ``graphs/<name>.yaml`` or a directory
``graphs/<name>/`` whose YAML files are merged.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ValidationError
import logging

from ..dag.errors import ConfigError

logger = logging.getLogger(__name__)


class PositionConfig(BaseModel):
    """Editor position of a node"""
    x: float = 0.0
    y: float = 0.0


class NodeConfig(BaseModel):
    """Configuration for a graph node"""
    key: str = Field(min_length=1)
    operation: str = Field(min_length=1)
    position: Optional[PositionConfig] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)


class EdgeConfig(BaseModel):
    """Configuration for an edge into a numbered input port"""
    source: str = Field(min_length=1)
    target: str = Field(min_length=1)
    target_port: int = Field(default=0, ge=0)


class GraphConfig(BaseModel):
    """Complete graph definition"""
    name: str = "graph"
    nodes: List[NodeConfig] = Field(default_factory=list)
    edges: List[EdgeConfig] = Field(default_factory=list)


class ConfigLoader:
    """
    Loads and validates graph definitions from YAML.

    The loader:
    1. Resolves ``graphs/<name>.yaml`` or every YAML file in ``graphs/<name>/``
    2. Parses and validates each file against GraphConfig
    3. Merges nodes and edges (identical duplicates allowed, conflicts rejected)
    4. Checks that every edge references a defined node and that no two
       edges feed the same port

    Example usage:
        loader = ConfigLoader(Path("config"))
        config = loader.load_graph("demo")

        store = GraphStore.from_config(config, registry)
    """

    def __init__(self, config_dir: Path):
        """
        Initialize loader with config directory.

        Args:
            config_dir: Root config directory (contains graphs/ subdirectory)
        """
        self.config_dir = Path(config_dir)
        logger.info(f"Initialized ConfigLoader with config_dir: {self.config_dir}")

    def load_graph(self, name: str) -> GraphConfig:
        """
        Load a named graph definition.

        Args:
            name: Graph name (file stem or directory name under graphs/)

        Returns:
            Validated GraphConfig

        Raises:
            ConfigError: If no definition exists, a file is invalid, or
                         definitions conflict
        """
        graphs_dir = self.config_dir / "graphs"

        for suffix in (".yaml", ".yml"):
            candidate = graphs_dir / f"{name}{suffix}"
            if candidate.is_file():
                return self.load_file(candidate)

        graph_dir = graphs_dir / name
        if not graph_dir.is_dir():
            raise ConfigError(
                f"No graph definition named '{name}'. "
                f"Expected: {graphs_dir / (name + '.yaml')} or {graph_dir}/"
            )

        yaml_files = sorted(list(graph_dir.glob("*.yaml")) + list(graph_dir.glob("*.yml")))
        if not yaml_files:
            raise ConfigError(f"No YAML files found in {graph_dir}")

        logger.info(f"Loading {len(yaml_files)} YAML files for graph '{name}'")
        configs = [self._read(path) for path in yaml_files]
        merged = self._merge_configs(name, configs)
        self._validate(merged)

        logger.info(
            f"Loaded graph '{name}': {len(merged.nodes)} nodes, {len(merged.edges)} edges"
        )
        return merged

    def load_file(self, path: Path) -> GraphConfig:
        """
        Load a single graph definition file.

        Raises:
            ConfigError: If the file is missing or invalid
        """
        config = self._read(Path(path))
        self._validate(config)
        logger.info(
            f"Loaded graph '{config.name}' from {Path(path).name}: "
            f"{len(config.nodes)} nodes, {len(config.edges)} edges"
        )
        return config

    @staticmethod
    def parse(raw: Any) -> GraphConfig:
        """
        Validate an already parsed mapping.

        Raises:
            ConfigError: If the mapping does not describe a valid graph
        """
        config = ConfigLoader._build(raw)
        ConfigLoader._validate(config)
        return config

    @staticmethod
    def _build(raw: Any, source: Optional[Path] = None) -> GraphConfig:
        """
        Turn one parsed YAML document into a GraphConfig.

        Cross-node checks are left to _validate: a file of a split graph may
        reference nodes defined in its siblings.
        """
        where = f" in {source}" if source is not None else ""
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(
                f"Graph definition{where} must be a mapping, got {type(raw).__name__}"
            )
        try:
            return GraphConfig(**raw)
        except ValidationError as e:
            logger.error(f"Failed to load graph definition{where}: {e}")
            raise ConfigError(f"Failed to load graph definition{where}: {e}") from e

    def _read(self, path: Path) -> GraphConfig:
        if not path.is_file():
            raise ConfigError(f"Graph definition not found: {path}")
        try:
            with open(path) as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse {path}: {e}")
            raise ConfigError(f"Failed to parse {path}: {e}") from e

        config = self._build(raw, path)

        logger.debug(f"Loaded {path.name}: {len(config.nodes)} nodes, {len(config.edges)} edges")
        return config

    def _merge_configs(self, name: str, configs: List[GraphConfig]) -> GraphConfig:
        """
        Merge multiple configs, validating uniqueness.

        Raises:
            ConfigError: If a node key is defined twice with different definitions
        """
        all_nodes: Dict[str, NodeConfig] = {}
        all_edges: List[EdgeConfig] = []

        for config in configs:
            for node in config.nodes:
                if node.key in all_nodes:
                    existing = all_nodes[node.key]
                    if existing != node:
                        raise ConfigError(
                            f"Conflicting definitions for node: {node.key}\n"
                            f"First: {existing}\n"
                            f"Second: {node}"
                        )
                    logger.debug(f"Node {node.key} already defined (identical), skipping")
                else:
                    all_nodes[node.key] = node

            for edge in config.edges:
                if edge in all_edges:
                    logger.debug(f"Edge {edge.source} -> {edge.target} already defined, skipping")
                    continue
                all_edges.append(edge)

        return GraphConfig(name=name, nodes=list(all_nodes.values()), edges=all_edges)

    @staticmethod
    def _validate(config: GraphConfig) -> None:
        """
        Check node uniqueness, edge endpoints and port occupancy.

        Raises:
            ConfigError: On the first violation found
        """
        keys = set()
        for node in config.nodes:
            if node.key in keys:
                raise ConfigError(f"Duplicate node key: {node.key}")
            keys.add(node.key)

        fed_ports: Dict[tuple, str] = {}
        for edge in config.edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in keys:
                    raise ConfigError(
                        f"Edge {edge.source} -> {edge.target} references unknown node: '{endpoint}'"
                    )
            slot = (edge.target, edge.target_port)
            if slot in fed_ports:
                raise ConfigError(
                    f"Port {edge.target_port} of node '{edge.target}' is fed by both "
                    f"'{fed_ports[slot]}' and '{edge.source}'"
                )
            fed_ports[slot] = edge.source
