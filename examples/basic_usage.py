#!/usr/bin/env python3
"""
Example: Basic usage of pkgrank as a Python library
"""

from pkgrank import DiGraph, Metric, analyze, seed_influence

# Build a small crate graph (A -> B means A depends on B)
graph = DiGraph()
app = graph.add_node("app::main")
cli = graph.add_node("app::cli")
core = graph.add_node("core::engine")
util = graph.add_node("core::util")
serde = graph.add_node("serde::de")

graph.add_or_update_edge(app, cli, 1.0)
graph.add_or_update_edge(app, core, 1.0)
graph.add_or_update_edge(cli, core, 1.0)
graph.add_or_update_edge(core, util, 1.0)
graph.add_or_update_edge(core, serde, 1.0)
graph.add_or_update_edge(util, serde, 1.0)

analysis = analyze(graph)
for row in analysis.top(Metric.PAGERANK, 3):
    print(f"{row.node:<14} pagerank={row.pagerank:.3f} "
          f"consumers={row.consumers_pagerank:.3f} betweenness={row.betweenness:.3f}")
print(f"converged: {analysis.pagerank_report.to_dict()}")
print()

# Collapse items into their crates and score the crate graph
crates = analyze(graph, key_fn=lambda name: name.split("::")[0])
for row in crates.rows():
    print(f"{row.node:<6} size={row.group_size} deps={row.dependencies} "
          f"top={[m for m, _ in row.top_members]}")
print()

# What does the application pull in?
influence = seed_influence(graph, app)
print(f"{influence.node} reaches {influence.reachable} nodes")
for node, score in influence.top:
    print(f"{node:<14} ppr={score:.3f}")
