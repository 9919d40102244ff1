"""
GraphExporter - Export extracted knowledge graphs to files.

Supports export to:
- Simple JSON ({nodes, links}) for backup and custom processing
- Cytoscape JSON for Cytoscape.js web visualization
- GraphML (XML) for Gephi/yEd/NetworkX

License: MIT
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import structlog

from voxgraph_core.config import settings
from voxgraph_core.exceptions import ProcessingError, ValidationError
from voxgraph_core.extractors.entity_extractor import GraphData
from voxgraph_core.graph.styling import (
    DEFAULT_NODE_COLOR,
    LINK_COLOR,
    NODE_COLORS,
    node_size,
)

logger = structlog.get_logger(__name__)


# ============================================================================
# Data Models
# ============================================================================


@dataclass
class ExportResult:
    """
    Result of graph export operation.

    Attributes:
        format: Export format used (json, cytoscape, graphml)
        output_path: Absolute path to exported file
        nodes_count: Number of nodes exported
        edges_count: Number of edges exported
        file_size_bytes: File size in bytes
        export_time_ms: Export duration in milliseconds
    """

    format: str
    output_path: str
    nodes_count: int
    edges_count: int
    file_size_bytes: int
    export_time_ms: float


# ============================================================================
# GraphExporter Class
# ============================================================================


class GraphExporter:
    """
    Write GraphData snapshots in formats understood by visualization tools.

    Common options (all exports):
        - pretty_print (bool): Indent output (default: settings.export_pretty_print)
        - include_metadata (bool): Include export metadata (default: True)
        - node_types (list): Keep only these node types; links survive only
          when both endpoints do (default: all)

    Example:
        >>> extractor = EntityExtractor()
        >>> _ = extractor.ingest("Alice works at Acme")
        >>> exporter = GraphExporter()
        >>> result = exporter.export_json(extractor.snapshot(), "/tmp/graph.json")
        >>> result.nodes_count
        2
    """

    def __init__(self, pretty_print: Optional[bool] = None) -> None:
        if pretty_print is None:
            pretty_print = settings.export_pretty_print

        self.pretty_print = pretty_print
        self.logger = logger.bind(component="graph_exporter")

    def export_json(
        self, graph: GraphData, output_path: str, options: Optional[Dict[str, Any]] = None
    ) -> ExportResult:
        """
        Export graph to simple JSON: {"nodes": [...], "links": [...], "metadata": {...}}.

        Raises:
            ValidationError: If output_path invalid or not .json
            ProcessingError: If serialization or file write fails
        """
        options = options or {}
        path_obj = self._validate_output_path(output_path, ".json")

        def build(filtered: GraphData, metadata: Dict[str, Any]) -> str:
            data = self._build_json(
                filtered, metadata, include_metadata=options.get("include_metadata", True)
            )
            return self._dump_json(data, options)

        return self._export("json", graph, path_obj, options, build)

    def export_cytoscape(
        self, graph: GraphData, output_path: str, options: Optional[Dict[str, Any]] = None
    ) -> ExportResult:
        """
        Export graph to Cytoscape JSON format.

        Extra options:
            - include_style (bool): Include a type-colored style sheet (default: True)

        Raises:
            ValidationError: If output_path invalid or not .json
            ProcessingError: If serialization or file write fails
        """
        options = options or {}
        path_obj = self._validate_output_path(output_path, ".json")

        def build(filtered: GraphData, metadata: Dict[str, Any]) -> str:
            data = self._build_cytoscape(
                filtered,
                metadata,
                include_metadata=options.get("include_metadata", True),
                include_style=options.get("include_style", True),
            )
            return self._dump_json(data, options)

        return self._export("cytoscape", graph, path_obj, options, build)

    def export_graphml(
        self, graph: GraphData, output_path: str, options: Optional[Dict[str, Any]] = None
    ) -> ExportResult:
        """
        Export graph to GraphML (XML) format.

        Raises:
            ValidationError: If output_path invalid or not .graphml
            ProcessingError: If serialization or file write fails
        """
        options = options or {}
        path_obj = self._validate_output_path(output_path, ".graphml")

        def build(filtered: GraphData, metadata: Dict[str, Any]) -> str:
            return self._build_graphml(
                filtered,
                metadata,
                pretty_print=options.get("pretty_print", self.pretty_print),
                include_metadata=options.get("include_metadata", True),
            )

        return self._export("graphml", graph, path_obj, options, build)

    # ========================================================================
    # Private Helper Methods
    # ========================================================================

    def _export(
        self,
        format_name: str,
        graph: GraphData,
        path_obj: Path,
        options: Dict[str, Any],
        build: Callable[[GraphData, Dict[str, Any]], str],
    ) -> ExportResult:
        start_time = datetime.now(timezone.utc)

        try:
            filtered = self._filter_graph(graph, options.get("node_types"))
            metadata = {
                "exported_at": start_time.isoformat(),
                "node_count": len(filtered.nodes),
                "edge_count": len(filtered.links),
                "node_types_filter": list(options.get("node_types") or []),
            }

            path_obj.write_text(build(filtered, metadata), encoding="utf-8")

            file_size = path_obj.stat().st_size
            elapsed = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000

            self.logger.info(
                f"{format_name}_export_complete",
                nodes=len(filtered.nodes),
                edges=len(filtered.links),
                file_size_kb=round(file_size / 1024, 2),
            )

            return ExportResult(
                format=format_name,
                output_path=str(path_obj),
                nodes_count=len(filtered.nodes),
                edges_count=len(filtered.links),
                file_size_bytes=file_size,
                export_time_ms=round(elapsed, 2),
            )

        except Exception as e:
            raise ProcessingError(
                message=f"{format_name} export failed: {str(e)}",
                error_code="PROC_001",
                details={"path": str(path_obj)},
                original_exception=e,
            )

    def _filter_graph(self, graph: GraphData, node_types: Optional[List[str]]) -> GraphData:
        if not node_types:
            return graph

        nodes = [node for node in graph.nodes if node["type"] in node_types]
        kept_ids = {node["id"] for node in nodes}
        links = [
            link
            for link in graph.links
            if link["source"] in kept_ids and link["target"] in kept_ids
        ]
        return GraphData(nodes=nodes, links=links)

    def _validate_output_path(self, path: str, expected_ext: str) -> Path:
        """
        Validate output path and extension.

        Raises:
            ValidationError: If path is empty, has the wrong extension, or its
                parent directory is missing
        """
        if not path:
            raise ValidationError(message="output_path cannot be empty", error_code="VAL_001")

        path_obj = Path(path).expanduser().resolve()

        if path_obj.suffix.lower() != expected_ext:
            raise ValidationError(
                message=f"output_path must have {expected_ext} extension, got {path_obj.suffix}",
                error_code="VAL_001",
                details={"path": path, "expected_ext": expected_ext},
            )

        if not path_obj.parent.is_dir():
            raise ValidationError(
                message=f"Parent directory does not exist: {path_obj.parent}",
                error_code="VAL_001",
                details={"path": path},
            )

        return path_obj

    def _dump_json(self, data: Dict[str, Any], options: Dict[str, Any]) -> str:
        indent = 2 if options.get("pretty_print", self.pretty_print) else None
        return json.dumps(data, indent=indent, ensure_ascii=False)

    # ========================================================================
    # Format Builders
    # ========================================================================

    def _build_json(
        self, graph: GraphData, metadata: Dict[str, Any], include_metadata: bool = True
    ) -> Dict[str, Any]:
        result = graph.to_dict()
        if include_metadata:
            result["metadata"] = metadata
        return result

    def _build_cytoscape(
        self,
        graph: GraphData,
        metadata: Dict[str, Any],
        include_metadata: bool = True,
        include_style: bool = True,
    ) -> Dict[str, Any]:
        elements: Dict[str, List[Dict[str, Any]]] = {"nodes": [], "edges": []}

        for node in graph.nodes:
            node_data = dict(node)
            node_data["size"] = node_size(node["mentions"])
            elements["nodes"].append({"data": node_data})

        for link in graph.links:
            elements["edges"].append(
                {
                    "data": {
                        "id": f"{link['source']}_{link['target']}_{link['type']}",
                        "source": link["source"],
                        "target": link["target"],
                        "label": link["type"],
                        "confidence": link["confidence"],
                    }
                }
            )

        result: Dict[str, Any] = {"elements": elements}

        if include_metadata:
            result["metadata"] = metadata

        if include_style:
            result["style"] = self._get_cytoscape_style()

        return result

    def _get_cytoscape_style(self) -> List[Dict[str, Any]]:
        style: List[Dict[str, Any]] = [
            {
                "selector": "node",
                "style": {
                    "background-color": DEFAULT_NODE_COLOR,
                    "label": "data(label)",
                    "width": "data(size)",
                    "height": "data(size)",
                },
            },
            {
                "selector": "edge",
                "style": {
                    "width": 2,
                    "line-color": LINK_COLOR,
                    "target-arrow-color": LINK_COLOR,
                    "target-arrow-shape": "triangle",
                    "curve-style": "bezier",
                    "label": "data(label)",
                },
            },
        ]
        for node_type, color in NODE_COLORS.items():
            style.append(
                {"selector": f"node[type='{node_type}']", "style": {"background-color": color}}
            )
        return style

    def _build_graphml(
        self,
        graph: GraphData,
        metadata: Dict[str, Any],
        pretty_print: bool = True,
        include_metadata: bool = True,
    ) -> str:
        root = ET.Element("graphml")
        root.set("xmlns", "http://graphml.graphdrawing.org/xmlns")

        self._add_graphml_key(root, "label", "node", "string")
        self._add_graphml_key(root, "type", "node", "string")
        self._add_graphml_key(root, "mentions", "node", "int")
        self._add_graphml_key(root, "relation", "edge", "string")
        self._add_graphml_key(root, "confidence", "edge", "double")

        graph_elem = ET.SubElement(root, "graph")
        graph_elem.set("id", "voxgraph_knowledge_graph")
        graph_elem.set("edgedefault", "directed")

        if include_metadata:
            desc = ET.SubElement(graph_elem, "desc")
            desc.text = f"Exported {metadata['exported_at']}"

        for node in graph.nodes:
            node_elem = ET.SubElement(graph_elem, "node")
            node_elem.set("id", str(node["id"]))
            self._add_graphml_data(node_elem, "label", str(node["label"]))
            self._add_graphml_data(node_elem, "type", str(node["type"]))
            self._add_graphml_data(node_elem, "mentions", str(node["mentions"]))

        for link in graph.links:
            edge_elem = ET.SubElement(graph_elem, "edge")
            edge_elem.set("id", f"{link['source']}_{link['target']}_{link['type']}")
            edge_elem.set("source", str(link["source"]))
            edge_elem.set("target", str(link["target"]))
            self._add_graphml_data(edge_elem, "relation", str(link["type"]))
            self._add_graphml_data(edge_elem, "confidence", str(link["confidence"]))

        if pretty_print:
            ET.indent(ET.ElementTree(root), space="  ")

        # Output is written as UTF-8.
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root, encoding="unicode")

    def _add_graphml_key(
        self, parent: ET.Element, key_id: str, for_type: str, attr_type: str
    ) -> None:
        """Add GraphML key definition."""
        key = ET.SubElement(parent, "key")
        key.set("id", key_id)
        key.set("for", for_type)
        key.set("attr.name", key_id)
        key.set("attr.type", attr_type)

    def _add_graphml_data(self, parent: ET.Element, key: str, value: str) -> None:
        """Add GraphML data element."""
        data = ET.SubElement(parent, "data")
        data.set("key", key)
        data.text = value
