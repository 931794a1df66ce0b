"""
Extraction configuration model.

Holds the tunable heuristics of the extraction engine: unit-code prefix,
section markers, block thresholds and the "no real feedback" phrase list.
"""

import re
from dataclasses import dataclass
from typing import Pattern, Tuple

import config.settings as settings


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Heuristics used by the block splitter, record parser and comment validator.

    Defaults mirror config/settings.py. Pass a custom instance to tune the
    engine for another report layout without touching the parsing code.
    """
    unit_code_prefix: str = settings.UNIT_CODE_PREFIX
    record_id_min_digits: int = settings.RECORD_ID_MIN_DIGITS
    min_block_length: int = settings.MIN_BLOCK_LENGTH
    comment_markers: Tuple[str, ...] = settings.COMMENT_MARKERS
    feedback_marker_pattern: str = settings.FEEDBACK_MARKER_PATTERN
    ignored_phrases: Tuple[str, ...] = settings.IGNORED_PHRASES
    min_comment_length: int = settings.MIN_COMMENT_LENGTH
    invalid_comment_sentinel: str = settings.INVALID_COMMENT_SENTINEL
    max_input_chars: int = settings.MAX_INPUT_CHARS
    max_blocks: int = settings.MAX_BLOCKS
    workers: int = settings.PARSE_WORKERS

    def __post_init__(self):
        if not self.unit_code_prefix:
            raise ValueError("unit_code_prefix must not be empty")

        if self.record_id_min_digits < 1:
            raise ValueError(
                f"Invalid record_id_min_digits: {self.record_id_min_digits}. Must be >= 1"
            )

        if not self.comment_markers or not all(self.comment_markers):
            raise ValueError("comment_markers must contain non-empty markers")

        for name in ("min_block_length", "min_comment_length"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

        for name in ("max_input_chars", "max_blocks", "workers"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1")

        # Lists are accepted but stored as tuples to keep the config hashable
        object.__setattr__(self, "comment_markers", tuple(self.comment_markers))
        object.__setattr__(self, "ignored_phrases", tuple(self.ignored_phrases))

    @property
    def block_boundary_pattern(self) -> Pattern:
        """Zero-width position right before every "#" + N digits token."""
        return re.compile(rf"(?=#[0-9]{{{self.record_id_min_digits},}})")

    @property
    def record_id_pattern(self) -> Pattern:
        return re.compile(r"#([0-9]+)")

    @property
    def unit_code_pattern(self) -> Pattern:
        return re.compile(re.escape(self.unit_code_prefix) + r"[A-Z0-9]+")

    @property
    def comment_marker_patterns(self) -> Tuple[Pattern, ...]:
        """Each marker as a whole word: "Comment" does not match "Commentary"."""
        return tuple(
            re.compile(rf"(?<!\w){re.escape(marker)}(?!\w)")
            for marker in self.comment_markers
        )

    @property
    def feedback_pattern(self) -> Pattern:
        return re.compile(self.feedback_marker_pattern)


# Design Rationale and Trade-offs:
#
# 1. Why a config object instead of reading settings directly?
#    - Tests and callers tune one run without patching globals
#    - Trade-off: Every component takes an optional config argument
#
# 2. Why compile patterns in properties?
#    - The config stays a plain frozen value
#    - Components compile once in their own __init__
#    - Trade-off: Repeated property access recompiles (re caches it)
