"""Shared content sanitization for prompt injection defense.

Journal entries are typed by the user but later fed back to the model when a
day is polished or a month is summarized, so every entry is treated as
untrusted. Two layers:

1. sanitize_prompt_input() neutralizes known injection phrasing and bounds
   length. It is a best-effort pattern filter and never raises.
2. build_user_input_block() wraps content in the USER_INPUT delimiter the
   prompts tell the model to treat as inert data, after stripping any copy
   of that delimiter from the content itself.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Tag name used for user content blocks across all prompts.
USER_INPUT_TAG = "USER_INPUT"

MAX_INPUT_LENGTH = 10_000

# Substituted for every filtered span
FILTERED_MARKER = "[filtered content]"

# (family, pattern) pairs, applied in order
_INJECTION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (family, re.compile(pattern, re.IGNORECASE))
    for family, pattern in (
        # Instruction overrides
        ("instruction override",
         r"(?:ignore|disregard|forget)\s+(?:all\s+)?(?:previous|above|prior)\s+"
         r"(?:instructions?|prompts?|commands?)"),
        # Fabricated system prompts
        ("system role", r"new\s+system\s+(?:prompt|message|instruction)"),
        ("system role", r"system\s*:\s*"),
        ("system role", r"\[system\]"),
        ("system role", r"<\|system\|>"),
        # Role switching
        ("role switch", r"you\s+are\s+now\s+a\s+different"),
        ("role switch", r"act\s+as\s+if\s+you"),
        ("role switch", r"pretend\s+(?:you\s+are|to\s+be)"),
        # Model control tokens
        ("control token", r"\[/?INST\]"),
        ("control token", r"<\|im_(?:start|end)\|>"),
        ("control token", r"<\|endoftext\|>"),
        # Code fence escapes
        ("fence escape", r"```\s*(?:end|stop|exit|finish)"),
        ("fence escape", r"```\s*\n\s*(?:ignore|new|system)"),
    )
)

_BACKTICK_RUN_RE = re.compile(r"`{4,}")
_ANGLE_RUN_RE = re.compile(r"[<>]{3,}")

_DELIMITER_TAG_RE = re.compile(
    rf"<\s*/?\s*{USER_INPUT_TAG}\s*>", re.IGNORECASE
)


def _collapse_runs(text: str) -> str:
    """Cap backtick runs at a code fence and angle-bracket runs at ``<<``."""
    text = _BACKTICK_RUN_RE.sub("```", text)
    return _ANGLE_RUN_RE.sub("<<", text)


def _filter_patterns(text: str) -> str:
    for family, pattern in _INJECTION_PATTERNS:
        text, count = pattern.subn(FILTERED_MARKER, text)
        if count:
            logger.debug("Filtered %d %s pattern(s) from input", count, family)
    return text


def sanitize_prompt_input(text: object) -> str:
    """Sanitize untrusted journal text before including it in prompts.

    Truncates to MAX_INPUT_LENGTH, replaces known injection patterns with
    FILTERED_MARKER, and collapses long backtick and angle-bracket runs.
    Ordinary entries pass through unchanged. Sanitizing twice gives the same
    result as sanitizing once.

    Args:
        text: Untrusted input. Anything that is not a non-empty string
            sanitizes to "".

    Returns:
        Sanitized text of at most MAX_INPUT_LENGTH characters.
    """
    if not text or not isinstance(text, str):
        return ""

    sanitized = _filter_patterns(text[:MAX_INPUT_LENGTH])
    sanitized = _collapse_runs(sanitized)
    # A collapsed run can complete a token such as <|system|>
    sanitized = _filter_patterns(sanitized)

    # Markers are longer than some of the spans they replace
    return sanitized[:MAX_INPUT_LENGTH]


def strip_delimiter_tags(text: str) -> str:
    """Remove every opening or closing USER_INPUT tag from text."""
    while True:
        stripped = _DELIMITER_TAG_RE.sub("", text)
        # Removing one tag can join the halves of another
        if stripped == text:
            return stripped
        text = stripped


def build_user_input_block(content: str | None) -> str:
    """Build the delimited user input block for LLM prompts.

    Args:
        content: Pre-sanitized user content. Delimiter tags inside it are
            stripped so the block can't be closed early.

    Returns:
        Block string. The block is emitted even when content is empty.
    """
    safe = strip_delimiter_tags(content or "")
    return f"<{USER_INPUT_TAG}>\n{safe}\n</{USER_INPUT_TAG}>"
