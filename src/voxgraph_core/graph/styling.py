"""
Visual hints for rendering extracted graphs.

Unknown node types fall back to DEFAULT_NODE_COLOR instead of being rejected.

License: MIT
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from voxgraph_core.extractors.entity_extractor import GraphData

NODE_COLORS: Dict[str, str] = {
    "person": "hsl(217, 92%, 60%)",
    "place": "hsl(192, 91%, 48%)",
    "organization": "hsl(271, 76%, 53%)",
    "concept": "hsl(223, 39%, 40%)",
}

DEFAULT_NODE_COLOR = "hsl(215, 16%, 65%)"

LINK_COLOR = "hsl(223, 39%, 24%)"

MIN_NODE_SIZE = 4


def node_color(node_type: str) -> str:
    """Fill color for a node type."""
    return NODE_COLORS.get(node_type, DEFAULT_NODE_COLOR)


def node_size(mentions: int) -> int:
    """Radius grows with mentions, never below MIN_NODE_SIZE."""
    return max(mentions * 2, MIN_NODE_SIZE)


def node_tooltip(node: Mapping[str, Any]) -> str:
    return f"{node['label']} ({node['mentions']} mentions)"


def graph_summary(graph: GraphData) -> str:
    return f"{len(graph.nodes)} entities · {len(graph.links)} relationships"
