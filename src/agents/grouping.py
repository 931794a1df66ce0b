"""
Unit Grouping.

Folds the flat record sequence into per-unit collections for reporting.
"""

import logging
from typing import Dict, Iterable, List

from src.models.survey_record import SurveyRecord
import config.settings as settings

logger = logging.getLogger(__name__)


def group_by_unit(records: Iterable[SurveyRecord]) -> Dict[str, List[SurveyRecord]]:
    """
    Group records by unit code.

    Units appear in order of their first record; records keep document
    order inside each unit.
    """
    groups: Dict[str, List[SurveyRecord]] = {}
    for record in records:
        groups.setdefault(record.unit_code, []).append(record)
    return groups


def build_unit_payload(
    records: Iterable[SurveyRecord],
    missing_comment: str = settings.MISSING_COMMENT_PLACEHOLDER
) -> List[Dict]:
    """
    Build the per-unit JSON payload consumed by report generation.

    Args:
        records: Parsed survey records
        missing_comment: Text shown for records without a valid comment

    Returns:
        List of {"UnitCode", "UnitName", "Surveys": [...]} dicts
    """
    payload = []
    for unit_code, unit_records in group_by_unit(records).items():
        payload.append({
            "UnitCode": unit_code,
            "UnitName": unit_code,  # Unit names live in the unit registry, not in the report
            "Surveys": [
                {
                    "Comment": r.comment or missing_comment,
                    "Score": r.score,
                    "LeaderFeedback": r.leader_feedback
                }
                for r in unit_records
            ]
        })

    logger.info(f"Built report payload for {len(payload)} units")
    return payload


# Design Rationale and Trade-offs:
#
# 1. Why a placeholder for missing comments in the payload?
#    - Report templates expect text in every survey row
#    - Records keep the raw empty comment for other consumers
#    - Trade-off: Placeholder is Portuguese, like the report
#
# 2. Why UnitName equal to UnitCode?
#    - Report text has no reliable unit name next to the code
#    - Trade-off: Names must be joined from another source
