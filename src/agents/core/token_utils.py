"""
Token budget utilities for chunked generation.
No app (api) dependencies.
"""

import math
import re
from typing import List

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """
    Estimate token count from text.
    Rough approximation: ~4 chars per token.
    """
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def chunk_budget(
    *,
    prompt: str,
    max_chunk_tokens: int = 99_000,
    model_context_tokens: int = 200_000,
    reserve_tokens: int = 5_000,
) -> int:
    """
    Tokens available for document content in one request: the chunk ceiling,
    or what the context window leaves after the prompt and a reserve.
    """
    return max(1, min(max_chunk_tokens, model_context_tokens - estimate_tokens(prompt) - reserve_tokens))


def _pack(pieces: List[str], separator: str, max_tokens: int) -> List[str]:
    """Greedily join pieces with `separator` while the result stays within max_tokens."""
    packed: List[str] = []
    current = ""
    for piece in pieces:
        candidate = f"{current}{separator}{piece}" if current else piece
        if estimate_tokens(candidate) <= max_tokens:
            current = candidate
        else:
            if current:
                packed.append(current)
            current = piece
    if current:
        packed.append(current)
    return packed


def _split_oversized(paragraph: str, max_tokens: int) -> List[str]:
    """Break a paragraph over budget on line boundaries, hard-splitting lines that are still too long."""
    step = max_tokens * CHARS_PER_TOKEN
    lines: List[str] = []
    for line in paragraph.split("\n"):
        if not line.strip():
            continue
        if estimate_tokens(line) <= max_tokens:
            lines.append(line)
        else:
            lines.extend(piece for piece in (line[i:i + step] for i in range(0, len(line), step)) if piece.strip())
    return _pack(lines, "\n", max_tokens)


def chunk_text(text: str, max_tokens: int) -> List[str]:
    """
    Split text into paragraph-aligned chunks, each estimated within max_tokens.
    A paragraph over the budget is split on lines, and an over-long line by characters.
    """
    pieces: List[str] = []
    for paragraph in PARAGRAPH_BREAK.split(text):
        if not paragraph.strip():
            continue
        if estimate_tokens(paragraph) <= max_tokens:
            pieces.append(paragraph)
        else:
            pieces.extend(_split_oversized(paragraph, max_tokens))
    return _pack(pieces, "\n\n", max_tokens)
