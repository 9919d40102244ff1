"""
Entity extraction components for voxgraph_core.

Classes:
    EntityExtractor: Incremental pattern-based extraction engine
    Entity: Knowledge graph node
    Relationship: Knowledge graph edge
    ExtractionResult: Current entity table and relationship list
    GraphData: Node/link projection for visualization

License: MIT
"""

from __future__ import annotations

from voxgraph_core.extractors.entity_extractor import (
    ENTITY_TYPES,
    RELATIONSHIP_TYPES,
    Entity,
    EntityExtractor,
    ExtractionResult,
    GraphData,
    Relationship,
)

__all__ = [
    "EntityExtractor",
    "Entity",
    "Relationship",
    "ExtractionResult",
    "GraphData",
    "ENTITY_TYPES",
    "RELATIONSHIP_TYPES",
]
