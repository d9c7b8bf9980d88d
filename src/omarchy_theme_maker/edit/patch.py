"""Patch engine - splice edited color literals back into text.

Two paths are provided:

- ``apply_color_change`` replaces one literal in the live buffer.
- ``rebuild_from_original`` replays a whole map of edits onto the pristine
  on-disk text, re-deriving every position from scratch.

Both fail closed: a patch that does not line up with the text raises a
``PatchError`` and leaves the input untouched. Lines are delimited by
``\\n`` only and the buffer is spliced in place, so line endings and the
presence or absence of a final newline are preserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from omarchy_theme_maker.codec.scanner import detect_colors_in_content
from omarchy_theme_maker.core.literal import DetectedColor, parse_color_id
from omarchy_theme_maker.errors import (
    ColumnOutOfRange,
    LineNotFound,
    PatchError,
    SpanMismatch,
)

logger = logging.getLogger(__name__)


def line_bounds(text: str, line: int) -> tuple[int, int]:
    """
    Absolute ``[start, end)`` offsets of line ``line`` in ``text``.

    ``end`` points at the terminating newline (or the end of the text).
    Raises LineNotFound if the text has fewer lines.
    """
    if line < 0:
        raise LineNotFound(line, text.count('\n') + 1)
    start = 0
    for _ in range(line):
        newline = text.find('\n', start)
        if newline == -1:
            raise LineNotFound(line, text.count('\n') + 1)
        start = newline + 1
    end = text.find('\n', start)
    if end == -1:
        end = len(text)
    return start, end


def apply_color_change(
    text: str,
    line: int,
    start_col: int,
    old_text: str,
    new_text: str,
) -> str:
    """
    Replace ``old_text`` at ``line``/``start_col`` with ``new_text``.

    Returns the new text. Every character outside the replaced span is
    kept. Raises LineNotFound, ColumnOutOfRange or SpanMismatch when the
    target no longer lines up with ``text``.
    """
    start, end = line_bounds(text, line)
    line_text = text[start:end]

    if not 0 <= start_col < len(line_text):
        raise ColumnOutOfRange(line, start_col, len(line_text))

    found = line_text[start_col:start_col + len(old_text)]
    if found != old_text:
        raise SpanMismatch(line, start_col, old_text, found)

    offset = start + start_col
    return text[:offset] + new_text + text[offset + len(old_text):]


def apply_detected_change(text: str, color: DetectedColor, new_text: str) -> str:
    """Replace a scanned literal with ``new_text``."""
    return apply_color_change(text, color.line, color.start_col, color.hex_text, new_text)


@dataclass
class RebuildResult:
    """Outcome of replaying a modified-colors map onto pristine text."""
    content: str
    applied: list[str] = field(default_factory=list)
    skipped: dict[str, PatchError] = field(default_factory=dict)

    @property
    def complete(self) -> bool:
        """True if every edit was applied."""
        return not self.skipped


def rebuild_from_original(
    original: str,
    modified: Mapping[str, str],
    detected: Sequence[DetectedColor] | None = None,
) -> RebuildResult:
    """
    Replay ``modified`` (color id -> new literal) onto ``original``.

    Positions come from the ids themselves, counted against ``original``;
    the length of the literal being replaced comes from a fresh scan of
    ``original``, falling back to ``detected`` for ids that scan does not
    know. Edits are applied from the end of the text backwards so an edit
    never moves the columns of one that is still pending. Edits that do
    not line up are skipped and listed in ``RebuildResult.skipped``.
    """
    pristine = {color.id: color for color in detect_colors_in_content(original)}
    live = {color.id: color for color in detected or ()}

    targets: list[tuple[int, int, str]] = []
    result = RebuildResult(content=original)

    for color_id in modified:
        position = parse_color_id(color_id)
        if position is None:
            result.skipped[color_id] = PatchError(f"Malformed color id: {color_id!r}")
            continue
        targets.append((position[0], position[1], color_id))

    for line, col, color_id in sorted(targets, reverse=True):
        old = pristine.get(color_id) or live.get(color_id)
        if old is None:
            result.skipped[color_id] = PatchError(f"No color literal known for id {color_id}")
            continue
        try:
            result.content = apply_color_change(
                result.content, line, col, old.hex_text, modified[color_id]
            )
        except PatchError as exc:
            logger.debug("Skipping %s during rebuild: %s", color_id, exc)
            result.skipped[color_id] = exc
            continue
        result.applied.append(color_id)

    return result
