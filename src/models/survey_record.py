"""
Survey record data model.

Represents one customer-satisfaction survey entry recovered from a report.
"""

import re
from dataclasses import dataclass
from typing import Optional

# Every character str.splitlines() breaks on
LINE_BREAKS = re.compile(r"[\n\r\x0b\x0c\x1c-\x1e\x85\u2028\u2029]+")


@dataclass(frozen=True)
class SurveyRecord:
    """
    Structured survey entry.
    Output of the Record Parser, one per accepted block.
    """
    id: str  # Digits of the "#12345" identifier
    unit_code: str  # Business unit, e.g. "SBRSPCBNF01"
    score: Optional[int] = None  # 0-10, None when no score was found
    comment: str = ""  # Single line; empty (or sentinel) when invalid
    leader_feedback: str = ""  # Single line; empty when none

    def __post_init__(self):
        if not self.id or not self.id.isdigit():
            raise ValueError(f"Invalid id: {self.id!r}. Must be a run of digits")

        if not self.unit_code:
            raise ValueError("Unit code is required")

        if self.score is not None:
            if isinstance(self.score, bool) or not isinstance(self.score, int):
                raise ValueError(f"Invalid score: {self.score!r}. Must be an int")
            if not (0 <= self.score <= 10):
                raise ValueError(f"Invalid score: {self.score}. Must be 0-10")

        for name in ("comment", "leader_feedback"):
            value = getattr(self, name)
            if LINE_BREAKS.search(value):
                raise ValueError(f"{name} must be a single line")

    @classmethod
    def from_dict(cls, data: dict) -> "SurveyRecord":
        """Create SurveyRecord from JSON dict."""
        return cls(
            id=data["id"],
            unit_code=data["unitCode"],
            score=data.get("npsScore"),
            comment=data.get("comment", ""),
            leader_feedback=data.get("leaderFeedback", "")
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "id": self.id,
            "unitCode": self.unit_code,
            "npsScore": self.score,
            "comment": self.comment,
            "leaderFeedback": self.leader_feedback
        }


# Design Rationale and Trade-offs:
#
# 1. Why a frozen dataclass?
#    - Records are shared across threads and result lists
#    - Trade-off: Changes need dataclasses.replace()
#
# 2. Why validate in __post_init__?
#    - Malformed records fail where they are built, inside the block guard
#    - Trade-off: Small cost per record
#
# 3. Why camelCase wire keys?
#    - Matches the JSON consumed by the report front end
#    - Trade-off: Attribute and key names differ
