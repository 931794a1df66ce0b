"""
Comment Validator.

Cleans the free-text comment cut out of a record block and decides whether
it carries real customer feedback.
"""

import logging
import re
from typing import Optional

from src.models.extraction_config import ExtractionConfig
from src.models.survey_record import LINE_BREAKS

logger = logging.getLogger(__name__)

_LEADING_COLON = re.compile(r"^:\s*")


def collapse_lines(text: str) -> str:
    """Replace every run of line breaks with one space and strip."""
    return LINE_BREAKS.sub(" ", text).strip()


class CommentValidator:
    """
    Applies the comment heuristics of an ExtractionConfig.

    A comment is invalid when it is too short or when it contains one of the
    boilerplate phrases operators type instead of a customer comment
    ("Sem contato", "Cliente não autorizou", ...). Invalid comments are
    replaced by the configured sentinel; the record itself is kept.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        self._phrases = tuple(p.casefold() for p in self.config.ignored_phrases)

    def clean(self, text: str) -> str:
        """
        Remove the marker remnant and flatten the comment to one line.

        Args:
            text: Raw text that followed the comment marker

        Returns:
            Single-line, trimmed comment
        """
        text = _LEADING_COLON.sub("", text.strip(), count=1)
        return collapse_lines(text)

    def is_valid(self, comment: str) -> bool:
        if len(comment.strip()) < self.config.min_comment_length:
            return False

        folded = comment.casefold()
        return not any(phrase in folded for phrase in self._phrases)

    def neuter(self, comment: str) -> str:
        """Return the comment when valid, else the sentinel."""
        if self.is_valid(comment):
            return comment

        logger.debug(f"Neutered comment: {comment[:40]!r}")
        return self.config.invalid_comment_sentinel


# Design Rationale and Trade-offs:
#
# 1. Why neuter invalid comments instead of dropping the record?
#    - The score is still valid and counts toward NPS
#    - Trade-off: Consumers must recognize the sentinel
#
# 2. Why substring matching on casefolded phrases?
#    - Operators add punctuation or extra words around the boilerplate
#    - Trade-off: A real comment quoting a phrase is neutered too
#
# 3. Why share LINE_BREAKS with SurveyRecord?
#    - Cleaning must remove exactly what the model rejects
#    - Trade-off: Validator depends on the model module
