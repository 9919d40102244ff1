"""
Unit tests for graph styling helpers.
"""

import pytest

from voxgraph_core.extractors.entity_extractor import EntityExtractor, GraphData
from voxgraph_core.graph.styling import (
    DEFAULT_NODE_COLOR,
    graph_summary,
    node_color,
    node_size,
    node_tooltip,
)


class TestNodeColor:
    """Test node_color()."""

    @pytest.mark.parametrize(
        "node_type, color",
        [
            ("person", "hsl(217, 92%, 60%)"),
            ("place", "hsl(192, 91%, 48%)"),
            ("organization", "hsl(271, 76%, 53%)"),
            ("concept", "hsl(223, 39%, 40%)"),
        ],
    )
    def test_known_types(self, node_type, color):
        """Each entity type has its own color."""
        assert node_color(node_type) == color

    def test_unknown_type_falls_back(self):
        """Unknown types get the default color instead of an error."""
        assert node_color("event") == DEFAULT_NODE_COLOR
        assert node_color("") == DEFAULT_NODE_COLOR


class TestNodeSize:
    """Test node_size()."""

    @pytest.mark.parametrize("mentions, size", [(0, 4), (1, 4), (2, 4), (3, 6), (10, 20)])
    def test_size_grows_with_mentions(self, mentions, size):
        assert node_size(mentions) == size


def test_node_tooltip():
    """Tooltip shows label and mention count."""
    node = {"id": "entity_0", "label": "Paris", "type": "place", "mentions": 3}

    assert node_tooltip(node) == "Paris (3 mentions)"


def test_graph_summary():
    """Summary counts entities and relationships."""
    extractor = EntityExtractor()
    extractor.ingest("Alice works at Acme")

    assert graph_summary(extractor.snapshot()) == "2 entities · 1 relationships"
    assert graph_summary(GraphData()) == "0 entities · 0 relationships"
