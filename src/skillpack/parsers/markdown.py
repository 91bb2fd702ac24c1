"""Line-level Markdown helpers shared by the link resolver."""

from __future__ import annotations

from collections.abc import Iterator

from skillpack.constants.parsing import FENCED_CODE_BLOCK_PATTERN, INLINE_CODE_PATTERN


def iter_prose_lines(body: str, *, start_line: int = 1) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, text)`` for body lines outside fenced code blocks.

    Inline code spans are blanked out of the yielded text.
    """
    active_fence_char: str | None = None
    for offset, line in enumerate(body.splitlines()):
        fence_char = _extract_fence_char(line.strip())
        if fence_char is not None:
            if active_fence_char is None:
                active_fence_char = fence_char
            elif fence_char == active_fence_char:
                active_fence_char = None
            continue
        if active_fence_char is not None:
            continue
        yield start_line + offset, INLINE_CODE_PATTERN.sub("", line)


def _extract_fence_char(line: str) -> str | None:
    match = FENCED_CODE_BLOCK_PATTERN.match(line)
    if not match:
        return None
    return match.group(1)[0]
