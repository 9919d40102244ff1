"""
Graph export and visualization hints.

Provides:
- GraphExporter: Write graph snapshots as JSON, Cytoscape JSON or GraphML
- ExportResult: Export statistics
- Styling helpers: node colors, sizes, tooltips and summaries
"""

from voxgraph_core.graph.graph_exporter import (
    ExportResult,
    GraphExporter,
)
from voxgraph_core.graph.styling import (
    DEFAULT_NODE_COLOR,
    NODE_COLORS,
    graph_summary,
    node_color,
    node_size,
    node_tooltip,
)

__all__ = [
    "GraphExporter",
    "ExportResult",
    "NODE_COLORS",
    "DEFAULT_NODE_COLOR",
    "node_color",
    "node_size",
    "node_tooltip",
    "graph_summary",
]
