"""
EntityExtractor - Incremental pattern-based entity and relationship extraction.

Builds a deduplicated knowledge graph from a stream of transcript chunks.
Each call to ingest() runs five passes over the chunk, in this order:

1. Person: two or more consecutive capitalized words ("Marie Curie")
2. Place: capitalized span after in/at/from/to ("in Paris")
3. Organization: capitalized word + institutional suffix ("Acme Corp")
4. Concept: remaining capitalized words of 4+ letters not already known
5. Relationship: verb patterns between two single-word tokens that already
   resolve to known entities ("Alice works at Acme")

Entities are keyed case-insensitively. Relationships are keyed by
(source id, target id, type), so re-deriving an edge is a no-op.

License: MIT
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

import structlog

from voxgraph_core.config import settings

logger = structlog.get_logger(__name__)


ENTITY_TYPES: Tuple[str, ...] = ("person", "place", "organization", "concept")

RELATIONSHIP_TYPES: Tuple[str, ...] = (
    "works_at",
    "knows",
    "lives_in",
    "studied_at",
    "founded",
)

ENTITY_ID_PREFIX = "entity_"

_PERSON_PATTERN = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+)\b", re.ASCII)
_PLACE_PATTERN = re.compile(
    r"\b(in|at|from|to)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)\b", re.ASCII
)
_ORGANIZATION_PATTERN = re.compile(
    r"\b([A-Z][a-z]+(?:\s+(?:Inc|Corp|LLC|Company|University|Institute))\b)", re.ASCII
)
_CONCEPT_PATTERN = re.compile(r"\b([A-Z][a-z]{3,})\b", re.ASCII)

# Checked in order; arguments are single \w+ tokens.
_RELATIONSHIP_PATTERNS: Tuple[Tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(\w+)\s+(?:works at|is employed by)\s+(\w+)", re.I | re.ASCII), "works_at"),
    (re.compile(r"(\w+)\s+(?:knows|met)\s+(\w+)", re.I | re.ASCII), "knows"),
    (re.compile(r"(\w+)\s+(?:lives in|is from)\s+(\w+)", re.I | re.ASCII), "lives_in"),
    (re.compile(r"(\w+)\s+(?:studied at|graduated from)\s+(\w+)", re.I | re.ASCII), "studied_at"),
    (re.compile(r"(\w+)\s+(?:founded|created|started)\s+(\w+)", re.I | re.ASCII), "founded"),
)


# ============================================================================
# Data Models
# ============================================================================


@dataclass
class Entity:
    """
    Knowledge graph entity.

    Attributes:
        id: Sequential identifier assigned at first sighting ("entity_0")
        text: Surface form as first seen (later sightings never overwrite it)
        type: One of person, place, organization, concept
        mentions: Number of sightings of this canonical entity
    """

    id: str
    text: str
    type: str
    mentions: int = 1


@dataclass
class Relationship:
    """
    Directed edge between two known entities.

    Attributes:
        id: "<source>_<target>_<type>", stable for the same triple
        source: Source entity id
        target: Target entity id
        type: Relation label (works_at, knows, lives_in, studied_at, founded)
        confidence: Constant heuristic score
    """

    id: str
    source: str
    target: str
    type: str
    confidence: float


@dataclass
class ExtractionResult:
    """Full current state returned by ingest(), not a per-call delta."""

    entities: List[Entity] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)


@dataclass
class GraphData:
    """
    Node/link projection consumed by visualization layers.

    Attributes:
        nodes: Dicts with id, label, type, mentions
        links: Dicts with source, target, type, confidence
    """

    nodes: List[Dict[str, Any]] = field(default_factory=list)
    links: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"nodes": self.nodes, "links": self.links}


# ============================================================================
# EntityExtractor Class
# ============================================================================


class EntityExtractor:
    """
    Stateful extraction engine owning an entity table and a relationship list.

    The stores are only changed through ingest() and clear(); everything
    handed out is a copy. ingest() accepts any string and never raises:
    text that matches nothing simply leaves the graph unchanged.

    Attributes:
        relationship_confidence: Score stamped on every new relationship

    Example:
        >>> extractor = EntityExtractor()
        >>> result = extractor.ingest("Alice works at Acme")
        >>> [e.text for e in result.entities]
        ['Acme', 'Alice']
        >>> result.relationships[0].type
        'works_at'
    """

    def __init__(self, relationship_confidence: Optional[float] = None) -> None:
        """
        Initialize an empty extractor.

        Args:
            relationship_confidence: Score for new relationships
                (default: settings.relationship_confidence)

        Raises:
            ValueError: If relationship_confidence not in [0.0, 1.0]
        """
        if relationship_confidence is None:
            relationship_confidence = settings.relationship_confidence

        if not 0.0 <= relationship_confidence <= 1.0:
            raise ValueError(
                "relationship_confidence must be in [0.0, 1.0], "
                f"got {relationship_confidence}"
            )

        self.relationship_confidence = relationship_confidence

        self._entities: Dict[str, Entity] = {}
        self._relationships: Dict[str, Relationship] = {}
        self._next_id = 0

        logger.debug(
            "entity_extractor_initialized",
            relationship_confidence=relationship_confidence,
        )

    # ------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------

    def ingest(self, text: str) -> ExtractionResult:
        """
        Extract entities and relationships from one chunk of text.

        Args:
            text: Finalized transcript chunk (any length, may be empty)

        Returns:
            ExtractionResult with the entire current entity table and
            relationship list
        """
        entities_before = len(self._entities)
        relationships_before = len(self._relationships)

        if text:
            for match in _PERSON_PATTERN.finditer(text):
                person = match.group(1)
                if len(person.split()) >= 2:
                    self._upsert_entity(person, "person")

            for match in _PLACE_PATTERN.finditer(text):
                self._upsert_entity(match.group(2), "place")

            for match in _ORGANIZATION_PATTERN.finditer(text):
                self._upsert_entity(match.group(1), "organization")

            # Must run after the passes above so their entities suppress concepts.
            for match in _CONCEPT_PATTERN.finditer(text):
                concept = match.group(1)
                if concept.lower() not in self._entities:
                    self._upsert_entity(concept, "concept")

            for pattern, relationship_type in _RELATIONSHIP_PATTERNS:
                for match in pattern.finditer(text):
                    self._add_relationship(match.group(1), match.group(2), relationship_type)

        logger.debug(
            "ingest_complete",
            text_length=len(text) if text else 0,
            new_entities=len(self._entities) - entities_before,
            new_relationships=len(self._relationships) - relationships_before,
            total_entities=len(self._entities),
            total_relationships=len(self._relationships),
        )

        return ExtractionResult(
            entities=[replace(entity) for entity in self._entities.values()],
            relationships=[replace(rel) for rel in self._relationships.values()],
        )

    def snapshot(self) -> GraphData:
        """
        Project the current state into nodes and links.

        Has no side effects; empty stores yield empty lists.
        """
        return GraphData(
            nodes=[
                {
                    "id": entity.id,
                    "label": entity.text,
                    "type": entity.type,
                    "mentions": entity.mentions,
                }
                for entity in self._entities.values()
            ],
            links=[
                {
                    "source": rel.source,
                    "target": rel.target,
                    "type": rel.type,
                    "confidence": rel.confidence,
                }
                for rel in self._relationships.values()
            ],
        )

    def clear(self) -> None:
        """Drop every entity and relationship and restart id generation."""
        self._entities = {}
        self._relationships = {}
        self._next_id = 0

        logger.debug("extractor_cleared")

    @property
    def entity_count(self) -> int:
        return len(self._entities)

    @property
    def relationship_count(self) -> int:
        return len(self._relationships)

    # ------------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------------

    def _upsert_entity(self, text: str, entity_type: str) -> Entity:
        """
        Record a sighting of an entity.

        Existing canonical keys only get their mention count bumped; type and
        text stay as first seen.
        """
        key = text.lower()
        existing = self._entities.get(key)

        if existing is not None:
            existing.mentions += 1
            return existing

        entity = Entity(
            id=f"{ENTITY_ID_PREFIX}{self._next_id}",
            text=text,
            type=entity_type,
            mentions=1,
        )
        self._next_id += 1
        self._entities[key] = entity
        return entity

    def _add_relationship(self, source: str, target: str, relationship_type: str) -> None:
        """Add an edge if both tokens resolve to known entities and the edge is new."""
        source_entity = self._entities.get(source.lower())
        target_entity = self._entities.get(target.lower())

        if source_entity is None or target_entity is None:
            return

        relationship_id = f"{source_entity.id}_{target_entity.id}_{relationship_type}"
        if relationship_id in self._relationships:
            return

        self._relationships[relationship_id] = Relationship(
            id=relationship_id,
            source=source_entity.id,
            target=target_entity.id,
            type=relationship_type,
            confidence=self.relationship_confidence,
        )
