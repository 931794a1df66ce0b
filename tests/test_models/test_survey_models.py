"""
Basic unit tests for the data models.
"""

import pytest
from src.models.extraction_config import ExtractionConfig
from src.models.parse_result import ParseResult, SkippedBlock
from src.models.survey_record import SurveyRecord


def test_survey_record_validation():
    record = SurveyRecord(id="12345", unit_code="SBRSPX1Z", score=8)
    assert record.score == 8

    with pytest.raises(ValueError):
        SurveyRecord(id="12a45", unit_code="SBRSPX1Z")

    with pytest.raises(ValueError):
        SurveyRecord(id="12345", unit_code="")

    with pytest.raises(ValueError):
        SurveyRecord(id="12345", unit_code="SBRSPX1Z", score=11)

    with pytest.raises(ValueError):
        SurveyRecord(id="12345", unit_code="SBRSPX1Z", comment="two\nlines")

    for breaking in ("\x0c", "\u2028", "\x85"):
        with pytest.raises(ValueError):
            SurveyRecord(id="12345", unit_code="SBRSPX1Z", comment=f"a{breaking}b")

        with pytest.raises(ValueError):
            SurveyRecord(id="12345", unit_code="SBRSPX1Z", leader_feedback=f"a{breaking}b")


def test_survey_record_is_immutable():
    record = SurveyRecord(id="12345", unit_code="SBRSPX1Z")

    with pytest.raises(AttributeError):
        record.comment = "changed"


def test_survey_record_serialization():
    record = SurveyRecord(
        id="12345",
        unit_code="SBRSPX1Z",
        score=None,
        comment="Great service",
        leader_feedback="Thanks!"
    )

    record_dict = record.to_dict()
    restored = SurveyRecord.from_dict(record_dict)

    assert record_dict["unitCode"] == "SBRSPX1Z"
    assert record_dict["npsScore"] is None
    assert restored == record


def test_config_defaults():
    config = ExtractionConfig()

    assert config.unit_code_prefix == "SBRSP"
    assert config.min_block_length == 50
    assert "Sem contato" in config.ignored_phrases


def test_config_validation():
    with pytest.raises(ValueError):
        ExtractionConfig(unit_code_prefix="")

    with pytest.raises(ValueError):
        ExtractionConfig(comment_markers=())

    with pytest.raises(ValueError):
        ExtractionConfig(workers=0)

    with pytest.raises(ValueError):
        ExtractionConfig(min_block_length=-1)


def test_config_lists_become_tuples():
    config = ExtractionConfig(ignored_phrases=["a", "b"], comment_markers=["Obs"])

    assert config.ignored_phrases == ("a", "b")
    assert config.comment_markers == ("Obs",)
    hash(config)


def test_config_unit_code_pattern_escapes_prefix():
    config = ExtractionConfig(unit_code_prefix="U.")

    assert config.unit_code_pattern.search("U.AB1").group(0) == "U.AB1"
    assert config.unit_code_pattern.search("UXAB1") is None


def test_config_comment_markers_match_whole_words():
    pattern = ExtractionConfig(comment_markers=("Comment",)).comment_marker_patterns[0]

    assert pattern.search("Comment: ok")
    assert pattern.search("(Comment)")
    assert not pattern.search("Commentary: ok")
    assert not pattern.search("NoComment")


def test_parse_result_ok_and_dict():
    result = ParseResult(records=[SurveyRecord(id="1", unit_code="SBRSPX1Z")])
    assert result.ok

    result.skipped.append(
        SkippedBlock.from_exception(3, "#12345\nSBRSPX1Z  texto", ValueError("bad"))
    )

    assert not result.ok
    assert result.to_dict()["skipped"] == [
        {"index": 3, "reason": "ValueError: bad", "excerpt": "#12345 SBRSPX1Z texto"}
    ]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
