"""
Transcript replay for the voxgraph CLI.

Reads a transcript file, feeds each line to a TranscriptSession as a speech
result, and exports the resulting graph.

Transcript format: one result per line. Lines starting with "~ " are interim
results; every other non-empty line is a final result.
"""

import json
import sys
import time
import uuid
from pathlib import Path
from typing import Iterator, Optional, Tuple

from voxgraph_core.exceptions import ProcessingError, VoxgraphError
from voxgraph_core.graph import GraphExporter, graph_summary
from voxgraph_core.logging_service import LoggingService
from voxgraph_core.transcript import TranscriptSession

INTERIM_PREFIX = "~ "


def read_transcript(path: Path) -> Iterator[Tuple[str, bool]]:
    """
    Yield (text, is_final) pairs from a transcript file.

    Raises:
        ProcessingError: If the file cannot be read
    """
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ProcessingError(
            message=f"Cannot read transcript {path}: {e}",
            error_code="PROC_002",
            details={"path": str(path)},
            original_exception=e,
        )

    for line in lines:
        if not line.strip():
            continue
        if line.startswith(INTERIM_PREFIX):
            yield line[len(INTERIM_PREFIX) :].strip(), False
        else:
            yield line.strip(), True


def extract_command(
    transcript_path: Path,
    export_format: str = "json",
    output_path: Optional[Path] = None,
    extract_interim_results: Optional[bool] = None,
) -> bool:
    """
    Replay a transcript and export the graph.

    Logging must be configured first (main() does this).

    Args:
        transcript_path: Transcript file to replay
        export_format: json, cytoscape or graphml (used with output_path)
        output_path: Export destination; prints JSON to stdout when None
        extract_interim_results: Override settings.extract_interim_results

    Returns:
        True if successful, False otherwise
    """
    correlation_id = str(uuid.uuid4())
    start = time.perf_counter()

    try:
        session = TranscriptSession(extract_interim_results=extract_interim_results)

        results = 0
        for text, is_final in read_transcript(transcript_path):
            session.handle_result(text, is_final=is_final)
            results += 1

        graph = session.graph
        LoggingService.log_operation(
            operation="transcript_replayed",
            correlation_id=correlation_id,
            metadata={
                "path": str(transcript_path),
                "results": results,
                "nodes": len(graph.nodes),
                "links": len(graph.links),
            },
            logger_name=__name__,
        )

        if output_path is None:
            print(json.dumps(graph.to_dict(), indent=2, ensure_ascii=False))
        else:
            exporter = GraphExporter()
            if export_format == "cytoscape":
                result = exporter.export_cytoscape(graph, str(output_path))
            elif export_format == "graphml":
                result = exporter.export_graphml(graph, str(output_path))
            else:
                result = exporter.export_json(graph, str(output_path))
            print(f"Exported to {result.output_path}")

        LoggingService.log_performance(
            operation="transcript_replay",
            duration_ms=(time.perf_counter() - start) * 1000,
            correlation_id=correlation_id,
            metadata={"format": export_format if output_path else "stdout"},
            logger_name=__name__,
        )

        print(graph_summary(graph), file=sys.stderr)
        return True

    except VoxgraphError as e:
        LoggingService.log_error(
            error=e,
            correlation_id=correlation_id,
            context={"operation": "transcript_replay"},
            logger_name=__name__,
        )
        print(f"Error [{e.error_code}]: {e.message}", file=sys.stderr)
        return False
