from collections.abc import Sequence

from lsprotocol.types import Position


def offset_at_position(lines: Sequence[str], position: Position) -> int:
    """
    Convert an LSP position to an offset into the document text.

    Args:
        lines: Document lines, line endings included (as pygls keeps them)
        position: Line and character (0-indexed)

    Returns:
        Offset into the joined lines, clamped to the end of the document
    """
    offset = 0
    for line in lines[: position.line]:
        offset += len(line)

    if position.line < len(lines):
        offset += min(position.character, len(lines[position.line]))

    return offset


def position_at_offset(lines: Sequence[str], offset: int) -> Position:
    """Convert an offset into the document text back to an LSP position."""
    for line_number, line in enumerate(lines):
        if offset < len(line):
            return Position(line=line_number, character=offset)
        offset -= len(line)

    if not lines:
        return Position(line=0, character=0)

    last = lines[-1]
    if last.endswith("\n"):
        # Past the final line break
        return Position(line=len(lines), character=0)
    return Position(line=len(lines) - 1, character=len(last))
