"""
Storage utility.

File I/O helpers for extracted page text and extraction outputs.
"""

import json
import os
import logging
from typing import Dict, Iterable, List, Optional

import pandas as pd

from src.models.parse_result import ParseResult
from src.models.survey_record import SurveyRecord

logger = logging.getLogger(__name__)

RECORD_COLUMNS = ["id", "unitCode", "npsScore", "comment", "leaderFeedback"]


class StorageManager:
    """
    Manages file I/O around the extraction engine.

    Handles:
    - Page text input (UTF-8 text files produced by the PDF extractor)
    - Records (output/<name>_records.json, output/<name>_records.csv)
    - Comment list (output/<name>_comments.json)
    - Per-unit report payload (output/<name>_units.json)
    - Diagnostics (output/<name>_diagnostics.json)
    - Raw text per unit (output/<name>_unit_text.json)
    """

    def __init__(self, output_root: str):
        """
        Initialize storage manager.

        Args:
            output_root: Directory for extraction outputs
        """
        self.output_root = output_root

        os.makedirs(self.output_root, exist_ok=True)

        logger.info(f"Initialized StorageManager with output_root={output_root}")

    def load_text(self, path: str) -> Optional[str]:
        """
        Load extracted text from a file.

        Args:
            path: Path to a UTF-8 text file

        Returns:
            File contents, or None if the file doesn't exist
        """
        if not os.path.exists(path):
            logger.warning(f"No text file found at {path}")
            return None

        # newline="" keeps "\r\n" intact for the normalizer
        with open(path, "r", encoding="utf-8", newline="") as f:
            text = f.read()
        logger.debug(f"Loaded {len(text)} chars from {path}")
        return text

    def load_pages(self, paths: Iterable[str]) -> List[str]:
        """Load page texts in the given order, skipping missing files."""
        pages = []
        for path in paths:
            text = self.load_text(path)
            if text is not None:
                pages.append(text)
        return pages

    def save_records_json(self, records: List[SurveyRecord], name: str) -> str:
        """Save records as a JSON array."""
        return self._write_json(
            [r.to_dict() for r in records],
            f"{name}_records.json",
            f"{len(records)} records"
        )

    def save_records_csv(self, records: List[SurveyRecord], name: str) -> str:
        """
        Save records as a CSV table.

        Args:
            records: Parsed survey records
            name: Output base name

        Returns:
            Path to the CSV file
        """
        filepath = os.path.join(self.output_root, f"{name}_records.csv")

        df = pd.DataFrame([r.to_dict() for r in records], columns=RECORD_COLUMNS)
        # Nullable integers keep missing scores empty instead of NaN floats
        df["npsScore"] = df["npsScore"].astype("Int64")

        try:
            df.to_csv(filepath, index=False)
            logger.info(f"Saved {len(df)} records to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save records CSV for {name}: {e}")
            raise

        return filepath

    def save_comments(self, comments: List[str], name: str) -> str:
        return self._write_json(comments, f"{name}_comments.json", f"{len(comments)} comments")

    def save_unit_payload(self, payload: List[Dict], name: str) -> str:
        return self._write_json(payload, f"{name}_units.json", f"{len(payload)} units")

    def save_unit_texts(self, unit_texts: Dict[str, str], name: str) -> str:
        """Save the raw text sliced per unit code."""
        return self._write_json(unit_texts, f"{name}_unit_text.json", f"text of {len(unit_texts)} units")

    def save_diagnostics(self, result: ParseResult, name: str) -> str:
        """Save skipped blocks, discard count and warnings of a run."""
        diagnostics = {
            "total_records": len(result.records),
            "rejected_count": result.rejected_count,
            "skipped": [s.to_dict() for s in result.skipped],
            "warnings": list(result.warnings)
        }
        return self._write_json(diagnostics, f"{name}_diagnostics.json", "diagnostics")

    def _write_json(self, data, filename: str, label: str) -> str:
        filepath = os.path.join(self.output_root, filename)

        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            logger.info(f"Saved {label} to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save {filename}: {e}")
            raise

        return filepath


# Design Rationale and Trade-offs:
#
# 1. Why return None on missing input files?
#    - The CLI reports unreadable pages and continues with the rest
#    - Trade-off: Callers must check for None
#
# 2. Why pandas for the CSV export?
#    - Nullable Int64 keeps missing scores empty instead of 9.0-style floats
#    - Same DataFrame can be reused for analysis downstream
#    - Trade-off: Heavy dependency for one table
#
# 3. Why ensure_ascii=False in JSON?
#    - Portuguese comments stay readable in the files
#    - Trade-off: Files must be read as UTF-8
