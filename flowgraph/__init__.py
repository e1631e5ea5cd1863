"""
flowgraph

Dataflow composition engine. Contains:
- dag: operators, registry, graph structure, traversal and fan-in
- evaluator: colimit construction over a graph snapshot
- runtime: graph store and command-line entry point
- config: YAML graph definitions
- operators: builtin scalar, logic and vector operators
"""
