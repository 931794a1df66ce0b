"""
Parse result data model.

Aggregates the records produced by one extraction run together with the
diagnostics for blocks that could not be processed.
"""

from dataclasses import dataclass, field
from typing import List

from src.agents.comment_extractor import extract_comments
from src.models.survey_record import SurveyRecord

EXCERPT_LENGTH = 80


@dataclass(frozen=True)
class SkippedBlock:
    """
    A block whose processing raised an unexpected error.
    The block is skipped; the rest of the document is still parsed.
    """
    index: int  # Position in the split block sequence
    reason: str  # "<ExceptionType>: <message>"
    excerpt: str  # Start of the block, single line

    @classmethod
    def from_exception(cls, index: int, block: str, error: Exception) -> "SkippedBlock":
        excerpt = " ".join(block[:EXCERPT_LENGTH].split())
        return cls(
            index=index,
            reason=f"{type(error).__name__}: {error}",
            excerpt=excerpt
        )

    def to_dict(self) -> dict:
        return {"index": self.index, "reason": self.reason, "excerpt": self.excerpt}


@dataclass
class ParseResult:
    """
    Outcome of parsing a document.

    records: accepted survey records, in document order
    skipped: blocks dropped because of an unexpected error
    rejected_count: header/footer/fragment blocks silently discarded
    warnings: whole-document conditions (no unit codes, caps reached, ...)
    sentinel: marker the parser used for neutered comments
    """
    records: List[SurveyRecord] = field(default_factory=list)
    skipped: List[SkippedBlock] = field(default_factory=list)
    rejected_count: int = 0
    warnings: List[str] = field(default_factory=list)
    sentinel: str = ""

    @property
    def ok(self) -> bool:
        """True when no block was skipped and no warning was raised."""
        return not self.skipped and not self.warnings

    @property
    def comments(self) -> List[str]:
        """Unique valid comments, in first-seen order."""
        return extract_comments(self.records, sentinel=self.sentinel)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "records": [r.to_dict() for r in self.records],
            "skipped": [s.to_dict() for s in self.skipped],
            "rejected_count": self.rejected_count,
            "warnings": list(self.warnings)
        }


# Design Rationale and Trade-offs:
#
# 1. Why separate skipped blocks from rejected blocks?
#    - Rejected blocks are expected (headers, fragments) and only counted
#    - Skipped blocks are unexpected errors and carry a reason and excerpt
#    - Trade-off: Two diagnostics to read instead of one
#
# 2. Why store the sentinel on the result?
#    - comments must exclude neutered comments for any configured sentinel
#    - Trade-off: One more field that to_dict() leaves out
