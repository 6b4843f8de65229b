# SPDX-License-Identifier: MIT

import logging
import re
from typing import Optional

from timeblocks.configuration import DEFAULT_BLOCK_LABEL
from timeblocks.model.block import TrackerBlockSpan
from timeblocks.model.tracker_id import TrackerId, generate_tracker_id

logger = logging.getLogger(__name__)

FENCE = "```"

TRACKER_ID_MARKER_PATTERN = re.compile(r"<!--\s*tracker-id:\s*(\S+)\s*-->")


def extract_tracker_id(text: str) -> Optional[TrackerId]:
    """Return the token of the first ``<!-- tracker-id: ... -->`` marker, if any."""
    match = TRACKER_ID_MARKER_PATTERN.search(text)
    return match.group(1) if match else None


def format_tracker_id_marker(tracker_id: TrackerId) -> str:
    return f"<!-- tracker-id: {tracker_id} -->"


def _is_opening_fence(line: str, block_label: str) -> bool:
    stripped = line.strip()
    opening = FENCE + block_label
    return stripped == opening or (
        stripped.startswith(opening) and stripped[len(opening)].isspace()
    )


def _is_closing_fence(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(FENCE) and stripped.strip("`") == ""


def find_tracker_blocks(
    document_text: str, block_label: str = DEFAULT_BLOCK_LABEL
) -> list[TrackerBlockSpan]:
    """
    Locate every fenced region tagged with ``block_label``.

    Regions are keyed by line span: ``line_start`` is the opening fence line,
    ``line_end`` the closing fence line (or the last line of the document when
    the region is never closed). Two regions with identical bodies are still
    two distinct spans.
    """
    lines = document_text.split("\n")
    spans: list[TrackerBlockSpan] = []

    line_number = 0
    while line_number < len(lines):
        if not _is_opening_fence(lines[line_number], block_label):
            line_number += 1
            continue

        line_start = line_number
        line_end = len(lines) - 1
        for candidate in range(line_start + 1, len(lines)):
            if _is_closing_fence(lines[candidate]):
                line_end = candidate
                break

        block_text = "\n".join(lines[line_start : line_end + 1])
        spans.append(
            {
                "line_start": line_start,
                "line_end": line_end,
                "tracker_id": extract_tracker_id(block_text),
            }
        )
        line_number = line_end + 1

    return spans


def ensure_ids_in_document(
    document_text: str, block_label: str = DEFAULT_BLOCK_LABEL
) -> tuple[str, bool]:
    """
    Stamp a tracker id marker into every tracker block that lacks one.

    The marker goes on its own line directly below the opening fence. Blocks
    that already carry a marker are left untouched, so a second pass over the
    result changes nothing.
    """
    spans = find_tracker_blocks(document_text, block_label)
    missing = [span for span in spans if span["tracker_id"] is None]
    if not missing:
        return document_text, False

    lines = document_text.split("\n")
    # bottom-up so earlier spans keep their line numbers
    for span in reversed(missing):
        opening_line = lines[span["line_start"]]
        line_ending = "\r" if opening_line.endswith("\r") else ""
        tracker_id = generate_tracker_id()
        lines.insert(
            span["line_start"] + 1,
            format_tracker_id_marker(tracker_id) + line_ending,
        )
        logger.debug(
            "stamped tracker id %s at line %d", tracker_id, span["line_start"] + 1
        )

    return "\n".join(lines), True


def resolve_tracker_id(document_text: str, line_start: int, line_end: int) -> TrackerId:
    """
    Identity of the block occupying ``line_start``..``line_end`` (inclusive).

    Falls back to a freshly generated id when the section carries no marker;
    the caller uses that id for the current render even though the document
    has not been rewritten yet.
    """
    lines = document_text.split("\n")
    section_text = "\n".join(lines[line_start : line_end + 1])
    tracker_id = extract_tracker_id(section_text)
    if tracker_id is None:
        tracker_id = generate_tracker_id()
        logger.info(
            "no tracker id in lines %d-%d, using generated id %s",
            line_start,
            line_end,
            tracker_id,
        )
    return tracker_id
