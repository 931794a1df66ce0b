"""
Record Parser.

Turns record blocks into SurveyRecord objects using anchor-based search:
identifier, unit code, score from the header region, then the comment and
leader feedback sections.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence, Tuple

from src.agents.comment_validator import CommentValidator, collapse_lines
from src.models.extraction_config import ExtractionConfig
from src.models.parse_result import ParseResult, SkippedBlock
from src.models.survey_record import SurveyRecord

logger = logging.getLogger(__name__)

# Free-standing 0-10 token, never part of a longer number. ASCII word
# boundaries: "9ª" and "9º" still count as a standalone 9.
SCORE_TOKEN_PATTERN = re.compile(r"\b(10|[0-9])\b", re.ASCII)

# Outcome kinds of a single block
ACCEPTED = "accepted"
REJECTED = "rejected"
SKIPPED = "skipped"


class RecordParser:
    """
    Parses record blocks into survey records.

    Per block:
    1. Reject short blocks and blocks without the unit-code prefix
    2. Extract id and unit code (first match of each)
    3. Score = last standalone 0-10 number before the comment marker
    4. Comment / leader feedback from the marker sections
    5. Clean and validate the comment (invalid comments are neutered)

    An unexpected error in one block is logged and reported as a
    SkippedBlock; the remaining blocks are still parsed.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        """
        Initialize record parser.

        Args:
            config: Extraction heuristics (defaults from settings)
        """
        self.config = config or ExtractionConfig()
        self.validator = CommentValidator(self.config)

        self._id_pattern = self.config.record_id_pattern
        self._unit_pattern = self.config.unit_code_pattern
        self._feedback_pattern = self.config.feedback_pattern
        self._marker_patterns = self.config.comment_marker_patterns

    def parse(self, blocks: Sequence[str]) -> ParseResult:
        """
        Parse all blocks, keeping document order.

        Args:
            blocks: Output of split_into_blocks()

        Returns:
            ParseResult with records, skipped-block diagnostics and the
            number of discarded blocks
        """
        indexed = list(enumerate(blocks))

        if self.config.workers > 1 and len(indexed) > 1:
            # map() yields results in submission order
            with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
                outcomes = list(executor.map(self._parse_indexed, indexed))
        else:
            outcomes = [self._parse_indexed(item) for item in indexed]

        result = ParseResult(sentinel=self.config.invalid_comment_sentinel)
        for kind, value in outcomes:
            if kind == ACCEPTED:
                result.records.append(value)
            elif kind == SKIPPED:
                result.skipped.append(value)
            else:
                result.rejected_count += 1

        logger.info(
            f"Parsed {len(result.records)} records from {len(indexed)} blocks "
            f"({result.rejected_count} discarded, {len(result.skipped)} skipped)"
        )
        return result

    def parse_block(self, block: str) -> Optional[SurveyRecord]:
        """
        Parse a single block.

        Returns:
            SurveyRecord, or None when the block is not a record

        Raises:
            ValueError: If the extracted fields violate SurveyRecord invariants
        """
        if len(block) < self.config.min_block_length:
            return None
        if self.config.unit_code_prefix not in block:
            return None

        id_match = self._id_pattern.search(block)
        unit_match = self._unit_pattern.search(block)
        if not id_match or not unit_match:
            return None

        marker_start, marker_end = self._find_comment_marker(block)

        score = self._extract_score(block, marker_start)
        comment, leader_feedback = self._extract_sections(block, marker_start, marker_end)

        comment = self.validator.neuter(self.validator.clean(comment))
        leader_feedback = collapse_lines(leader_feedback)

        return SurveyRecord(
            id=id_match.group(1),
            unit_code=unit_match.group(0),
            score=score,
            comment=comment,
            leader_feedback=leader_feedback
        )

    def _parse_indexed(self, item: Tuple[int, str]) -> Tuple[str, object]:
        index, block = item
        try:
            record = self.parse_block(block)
        except Exception as e:
            skipped = SkippedBlock.from_exception(index, block, e)
            logger.error(f"Failed to process block {index} ({skipped.excerpt!r}): {e}")
            return SKIPPED, skipped

        if record is None:
            return REJECTED, None
        return ACCEPTED, record

    def _find_comment_marker(self, block: str) -> Tuple[int, int]:
        """
        Locate the earliest comment marker standing as a whole word.

        Returns:
            (start, end) of the marker, or (-1, -1) when absent
        """
        best = (-1, -1)
        for pattern in self._marker_patterns:
            match = pattern.search(block)
            if match and (best[0] == -1 or match.start() < best[0]):
                best = (match.start(), match.end())
        return best

    def _extract_score(self, block: str, marker_start: int) -> Optional[int]:
        """
        Take the last standalone 0-10 number of the header region.

        Earlier numbers in the header are usually dates or counts. A stray
        0-10 numeral right before the real score (a page number, say) will
        be picked instead; the heuristic is lossy on such layouts.
        """
        if marker_start <= 0:
            return None

        numbers = SCORE_TOKEN_PATTERN.findall(block[:marker_start])
        if not numbers:
            return None
        return int(numbers[-1])

    def _extract_sections(
        self,
        block: str,
        marker_start: int,
        marker_end: int
    ) -> Tuple[str, str]:
        """Cut the raw comment and leader feedback text out of the block."""
        if marker_start == -1:
            return "", ""

        feedback_match = self._feedback_pattern.search(block, marker_end)
        if feedback_match:
            comment = block[marker_end:feedback_match.start()].strip()
            leader_feedback = block[feedback_match.end():].strip()
            return comment, leader_feedback

        return block[marker_end:].strip(), ""


def parse_records(
    blocks: Sequence[str],
    config: Optional[ExtractionConfig] = None
) -> ParseResult:
    """Parse blocks with a one-off RecordParser."""
    return RecordParser(config).parse(blocks)


# Design Rationale and Trade-offs:
#
# 1. Why the last 0-10 number before the comment marker as score?
#    - The score column is printed right before the comment in the layout
#    - Dates and protocol numbers come earlier or are longer than two digits
#    - Trade-off: A page number between score and marker is picked instead
#
# 2. Why whole-word comment markers?
#    - Words like "Commentary" in the header must not start the comment
#    - Trade-off: A marker glued to the previous word is missed
#
# 3. Why a thread pool instead of processes?
#    - Blocks are small and regex work is short
#    - No pickling of config or records
#    - Trade-off: Limited by the GIL, the sequential path is the default
#
# 4. Why catch every exception per block?
#    - One malformed record must not cost the whole report
#    - Trade-off: Bugs show up as skipped blocks, so they are logged at error
