"""
Voxgraph Core Layer.

Contains:
- EntityExtractor: incremental entity/relationship extraction
- TranscriptSession: speech result handling
- GraphExporter and styling helpers
- Exception hierarchy, configuration and logging service

License: MIT
"""

from .config import (
    VoxgraphSettings,
    get_config_summary,
    settings,
)
from .exceptions import (
    ProcessingError,
    SpeechRecognitionError,
    ValidationError,
    VoxgraphError,
)
from .extractors import (
    Entity,
    EntityExtractor,
    ExtractionResult,
    GraphData,
    Relationship,
)
from .logging_service import (
    LoggingConfig,
    LoggingService,
)
from .transcript import TranscriptSegment, TranscriptSession

__all__ = [
    # Exceptions
    "VoxgraphError",
    "ValidationError",
    "ProcessingError",
    "SpeechRecognitionError",
    # Configuration
    "VoxgraphSettings",
    "settings",
    "get_config_summary",
    # Logging
    "LoggingService",
    "LoggingConfig",
    # Extraction
    "EntityExtractor",
    "Entity",
    "Relationship",
    "ExtractionResult",
    "GraphData",
    # Transcript
    "TranscriptSession",
    "TranscriptSegment",
]
