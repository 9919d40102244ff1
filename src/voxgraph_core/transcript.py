"""
TranscriptSession - Bridges speech recognition results and the extractor.

Speech sources emit a stream of interim results for the utterance in progress,
followed by one final result. The session keeps the transcript segments for
display and decides which text reaches the EntityExtractor: final results
always, interim results only when extract_interim_results is enabled.

Recognition failures are reported here as SpeechRecognitionError; the
extractor never sees them.

License: MIT
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

import structlog

from voxgraph_core.config import settings
from voxgraph_core.exceptions import SpeechRecognitionError
from voxgraph_core.extractors.entity_extractor import EntityExtractor, GraphData

logger = structlog.get_logger(__name__)

# Errors the speech source reports during normal pauses.
IGNORED_SPEECH_ERRORS = frozenset({"no-speech"})

SPEECH_ERROR_CODES: Dict[str, str] = {
    "not-allowed": "SPEECH_002",
    "service-not-allowed": "SPEECH_002",
    "not-supported": "SPEECH_003",
}


@dataclass
class TranscriptSegment:
    """
    One utterance of the transcript.

    Attributes:
        id: Segment identifier, shared by its interim and final results
        text: Latest recognized text
        timestamp: When the latest text arrived (UTC)
        is_final: Whether the speech source finalized this segment
    """

    id: str
    text: str
    timestamp: datetime
    is_final: bool


class TranscriptSession:
    """
    Accumulates transcript segments and feeds them to an EntityExtractor.

    Attributes:
        extractor: Extraction engine receiving transcript text
        extract_interim_results: Also extract from non-final results
        max_text_length: Longer chunks are truncated before extraction

    Example:
        >>> session = TranscriptSession()
        >>> session.handle_result("Alice works", is_final=False)
        >>> graph = session.handle_result("Alice works at Acme", is_final=True)
        >>> len(graph.links)
        1
    """

    def __init__(
        self,
        extractor: Optional[EntityExtractor] = None,
        extract_interim_results: Optional[bool] = None,
        max_text_length: Optional[int] = None,
    ) -> None:
        if extract_interim_results is None:
            extract_interim_results = settings.extract_interim_results
        if max_text_length is None:
            max_text_length = settings.max_text_length

        if max_text_length < 1:
            raise ValueError(f"max_text_length must be positive, got {max_text_length}")

        self.extractor = extractor if extractor is not None else EntityExtractor()
        self.extract_interim_results = extract_interim_results
        self.max_text_length = max_text_length

        self._segments: List[TranscriptSegment] = []
        self._current_segment_id = self._new_segment_id()

    @property
    def segments(self) -> List[TranscriptSegment]:
        """Transcript segments in arrival order (copies)."""
        return [replace(segment) for segment in self._segments]

    @property
    def graph(self) -> GraphData:
        return self.extractor.snapshot()

    def handle_result(self, text: str, is_final: bool) -> Optional[GraphData]:
        """
        Record a speech recognition result.

        The current segment is replaced by the new text. A final result closes
        the segment; the next result opens a new one.

        Args:
            text: Recognized text
            is_final: Whether the speech source finalized this text

        Returns:
            Updated graph snapshot if the text was extracted, else None
        """
        segment = TranscriptSegment(
            id=self._current_segment_id,
            text=text,
            timestamp=datetime.now(timezone.utc),
            is_final=is_final,
        )
        self._segments = [s for s in self._segments if s.id != segment.id]
        self._segments.append(segment)

        if is_final:
            self._current_segment_id = self._new_segment_id()
        elif not self.extract_interim_results:
            return None

        self.extractor.ingest(self._truncate(text))

        logger.debug(
            "transcript_result_extracted",
            segment_id=segment.id,
            is_final=is_final,
            entities=self.extractor.entity_count,
            relationships=self.extractor.relationship_count,
        )

        return self.extractor.snapshot()

    def handle_error(self, error: str) -> None:
        """
        Surface a speech recognition error.

        Args:
            error: Error name reported by the speech source

        Raises:
            SpeechRecognitionError: For any error other than "no-speech"
        """
        if error in IGNORED_SPEECH_ERRORS:
            logger.debug("speech_error_ignored", error=error)
            return

        error_code = SPEECH_ERROR_CODES.get(error, "SPEECH_001")
        logger.warning("speech_recognition_error", error=error, error_code=error_code)

        if error_code == "SPEECH_002":
            message = "Microphone permission denied"
        elif error_code == "SPEECH_003":
            message = "Speech recognition is not supported"
        else:
            message = f"Speech recognition error: {error}"

        raise SpeechRecognitionError(
            message=message,
            error_code=error_code,
            details={"error": error},
        )

    def clear(self) -> None:
        """Drop all segments and reset the extractor."""
        self._segments = []
        self._current_segment_id = self._new_segment_id()
        self.extractor.clear()

        logger.info("transcript_session_cleared")

    def _truncate(self, text: str) -> str:
        if len(text) <= self.max_text_length:
            return text

        logger.warning(
            "transcript_chunk_truncated",
            text_length=len(text),
            max_text_length=self.max_text_length,
        )
        return text[: self.max_text_length]

    @staticmethod
    def _new_segment_id() -> str:
        return uuid.uuid4().hex
