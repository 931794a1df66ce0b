"""
Extraction Pipeline.

Coordinates the engine stages over one document's text.
"""

import logging
from typing import Iterable, List, Optional

from src.agents.normalizer import normalize, join_pages
from src.agents.block_splitter import split_into_blocks
from src.agents.record_parser import RecordParser
from src.models.extraction_config import ExtractionConfig
from src.models.parse_result import ParseResult
from src.models.survey_record import SurveyRecord

logger = logging.getLogger(__name__)


class ExtractionPipeline:
    """
    Runs the survey-record extraction engine.

    Stages:
    1. Normalization → 2. Block Splitting → 3. Record Parsing
    → (optional) 4. Comment List Extraction

    run() never raises: failures come back as warnings or skipped-block
    diagnostics on the ParseResult.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        """
        Initialize extraction pipeline.

        Args:
            config: Extraction heuristics (defaults from settings)
        """
        self.config = config or ExtractionConfig()
        self.parser = RecordParser(self.config)

        logger.info(
            f"Initialized ExtractionPipeline with prefix={self.config.unit_code_prefix}, "
            f"workers={self.config.workers}"
        )

    def run(self, raw_text: Optional[str]) -> ParseResult:
        """
        Extract survey records from one document's text.

        Args:
            raw_text: Concatenated page text of the report

        Returns:
            ParseResult (possibly empty)
        """
        try:
            return self._run(raw_text)
        except Exception as e:
            logger.error(f"Extraction failed: {e}", exc_info=True)
            return ParseResult(warnings=[f"Extraction failed: {type(e).__name__}: {e}"])

    def run_pages(self, pages: Iterable[str]) -> ParseResult:
        """Extract survey records from per-page text, in page order."""
        return self.run(join_pages(pages))

    def extract_comments(self, raw_text: Optional[str]) -> List[str]:
        """Unique valid comments of a document, in first-seen order."""
        return self.run(raw_text).comments

    def _run(self, raw_text: Optional[str]) -> ParseResult:
        warnings = []

        # STAGE 1: Normalization
        text = normalize(raw_text)

        if len(text) > self.config.max_input_chars:
            message = (
                f"Input truncated from {len(text)} to "
                f"{self.config.max_input_chars} characters"
            )
            logger.warning(message)
            warnings.append(message)
            text = text[:self.config.max_input_chars]

        if not self.config.unit_code_pattern.search(text):
            message = "No unit codes found in document text"
            logger.warning(message)
            return ParseResult(warnings=[*warnings, message])

        # STAGE 2: Block Splitting
        blocks = split_into_blocks(text, self.config)

        if len(blocks) > self.config.max_blocks:
            message = (
                f"Block count capped at {self.config.max_blocks} "
                f"({len(blocks) - self.config.max_blocks} trailing blocks ignored)"
            )
            logger.warning(message)
            warnings.append(message)
            blocks = blocks[:self.config.max_blocks]

        # STAGE 3: Record Parsing
        result = self.parser.parse(blocks)
        result.warnings[:0] = warnings

        logger.info(
            f"Extracted {len(result.records)} records "
            f"({len(result.skipped)} blocks skipped)"
        )
        return result


def extract_surveys(
    raw_text: Optional[str],
    config: Optional[ExtractionConfig] = None
) -> List[SurveyRecord]:
    """Convenience wrapper returning only the records."""
    return ExtractionPipeline(config).run(raw_text).records


# Design Rationale and Trade-offs:
#
# 1. Why does run() never raise?
#    - One bad document must not stop a batch of reports
#    - The failure is logged with traceback and returned as a warning
#    - Trade-off: Callers must check result.ok or warnings
#
# 2. Why check for unit codes before splitting?
#    - Text without any unit code can't hold a record
#    - Gives one clear warning instead of a pile of rejected blocks
#    - Trade-off: One extra scan over the text
#
# 3. Why cap after normalization?
#    - Caps measure the text the parser actually sees
#    - Trade-off: Normalization still runs over the full input
