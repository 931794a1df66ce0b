"""
Comment List Extractor.

Derives the deduplicated list of valid customer comments from parsed records.
"""

import logging
from typing import Iterable, List

from src.models.survey_record import SurveyRecord

logger = logging.getLogger(__name__)


def extract_comments(records: Iterable[SurveyRecord], sentinel: str = "") -> List[str]:
    """
    Collect non-empty comments, dropping exact duplicates.

    Args:
        records: Parsed survey records, in document order
        sentinel: Marker used for neutered comments; never returned

    Returns:
        Unique comments in first-seen order
    """
    seen = set()
    comments = []

    for record in records:
        comment = record.comment
        if not comment or comment == sentinel or comment in seen:
            continue
        seen.add(comment)
        comments.append(comment)

    logger.debug(f"Extracted {len(comments)} unique comments")
    return comments


# Design Rationale and Trade-offs:
#
# 1. Why deduplicate on the exact cleaned text?
#    - Repeated pages produce identical comments
#    - Trade-off: Near-duplicates with different punctuation are kept
