"""
Flowgraph Runner - Main Entry Point

Loads a YAML graph definition, seeds a graph store, and evaluates the colimit
at a target node (or at every sink node when no target is set).
"""

import logging
import sys
from typing import Any, Dict, Optional

from flowgraph.config.loader import ConfigLoader
from flowgraph.config.settings import RuntimeSettings
from flowgraph.dag.errors import DataflowError
from flowgraph.operators import create_default_registry
from flowgraph.runtime.store import GraphStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def sink_nodes(store: GraphStore) -> list[str]:
    """Nodes with no outgoing edges, in insertion order"""
    graph = store.snapshot()
    return [key for key in graph.nodes() if graph.out_degree(key) == 0]


def run(settings: RuntimeSettings) -> Dict[str, Any]:
    """
    Evaluate a configured graph.

    Args:
        settings: Runtime settings (config dir, graph name, target node)

    Returns:
        Dictionary mapping each evaluated node to its output
    """
    logger.info(f"Config Directory: {settings.config_dir}")
    logger.info(f"Graph: {settings.graph}")

    registry = create_default_registry()
    loader = ConfigLoader(settings.config_dir)
    config = loader.load_graph(settings.graph)
    store = GraphStore.from_config(config, registry)

    targets = [settings.target] if settings.target else sink_nodes(store)
    logger.info(f"Evaluating {len(targets)} node(s): {targets}")

    results = {}
    for target in targets:
        op_map = store.colimit(target)
        composed = op_map[target]
        results[target] = composed()
        logger.info(
            f"{target} = {results[target]!r} "
            f"(upstream nodes: {len(op_map)}, free ports: {composed.free_ports})"
        )
    return results


def main(settings: Optional[RuntimeSettings] = None) -> int:
    """
    Main entry point.

    Environment Variables:
        FLOWGRAPH_CONFIG_DIR: Config directory path (default: "config")
        FLOWGRAPH_GRAPH: Graph name under graphs/ (default: "demo")
        FLOWGRAPH_TARGET: Node to evaluate (default: every sink node)
        FLOWGRAPH_LOG_LEVEL: Logging level (default: "INFO")
    """
    settings = settings or RuntimeSettings.from_env()
    configure_logging(settings.log_level)

    try:
        run(settings)
    except DataflowError as e:
        logger.error(f"Evaluation failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
