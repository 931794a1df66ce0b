"""
Block Splitter.

Partitions normalized report text into candidate record blocks.
"""

import logging
from typing import Dict, List, Optional

from src.models.extraction_config import ExtractionConfig

logger = logging.getLogger(__name__)


def split_into_blocks(
    normalized_text: str,
    config: Optional[ExtractionConfig] = None
) -> List[str]:
    """
    Split text right before every record identifier ("#" + 5 or more digits).

    The split is zero-width: each identifier stays at the head of the block
    that follows it. Text before the first identifier (report header, page
    furniture) comes back as its own leading block for the parser to discard.

    Args:
        normalized_text: Output of normalize()
        config: Extraction heuristics (defaults from settings)

    Returns:
        Blocks in document order
    """
    config = config or ExtractionConfig()

    if not normalized_text:
        return []

    blocks = [
        block for block in config.block_boundary_pattern.split(normalized_text)
        if block
    ]

    logger.debug(f"Split {len(normalized_text)} chars into {len(blocks)} blocks")
    return blocks


def split_text_by_unit(
    raw_text: str,
    config: Optional[ExtractionConfig] = None
) -> Dict[str, str]:
    """
    Alternate split strategy: cut the text at every unit code occurrence.

    Not used by the record parser. The CLI saves its output with --unit-text
    to inspect what text each unit owns when a report layout changes.

    Each slice runs from one unit code to the next. Slices of a unit code
    seen more than once are joined with a single space, in document order.

    Args:
        raw_text: Document text
        config: Extraction heuristics (defaults from settings)

    Returns:
        Mapping of unit code to its accumulated text, in first-seen order
    """
    config = config or ExtractionConfig()
    unit_texts: Dict[str, str] = {}

    matches = list(config.unit_code_pattern.finditer(raw_text or ""))

    if not matches:
        logger.warning("No unit codes found in document text")
        return unit_texts

    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(raw_text)
        unit_code = match.group(0)
        unit_text = raw_text[match.start():end]

        if unit_code in unit_texts:
            unit_texts[unit_code] = unit_texts[unit_code] + " " + unit_text
        else:
            unit_texts[unit_code] = unit_text

    logger.debug(f"Split text into {len(unit_texts)} units ({len(matches)} occurrences)")
    return unit_texts


# Design Rationale and Trade-offs:
#
# 1. Why a zero-width split on "#" + digits?
#    - Keeps each identifier at the head of its own block
#    - Short "#123" tokens inside comments don't start a block
#    - Trade-off: A 5+ digit "#" number inside a comment still splits it
#
# 2. Why keep split_text_by_unit next to split_into_blocks?
#    - Both slice the same normalized text, only the boundary differs
#    - Trade-off: A second strategy to keep working across layouts
