"""Split a content body into blocks on blank-line boundaries.

Fenced code keeps its blank lines: a candidate block that opens a fence and
does not close it is merged with the following candidates until the fence
closes.
"""

from __future__ import annotations

from ..errors import StructuralParseError

FENCE = "```"
BLOCK_SEPARATOR = "\n\n"


def _fence_lines(text: str) -> int:
    return sum(1 for line in text.split("\n") if line.strip().startswith(FENCE))


def split_blocks(body: str) -> list[str]:
    """Return the blocks of ``body`` in order, without surrounding newlines."""
    blocks: list[str] = []
    open_fence: list[str] | None = None

    for candidate in body.split(BLOCK_SEPARATOR):
        if open_fence is not None:
            open_fence.append(candidate)
            # an odd number of fence lines toggles the fence closed
            if _fence_lines(candidate) % 2 == 1:
                blocks.append(BLOCK_SEPARATOR.join(open_fence))
                open_fence = None
            continue
        if candidate.strip("\n").startswith(FENCE) and _fence_lines(candidate) % 2 == 1:
            open_fence = [candidate]
            continue
        blocks.append(candidate)

    if open_fence is not None:
        first_line = open_fence[0].strip("\n").split("\n", 1)[0]
        raise StructuralParseError(f"Unterminated code fence: {first_line}")

    stripped = (block.strip("\n") for block in blocks)
    return [block for block in stripped if block.strip()]
