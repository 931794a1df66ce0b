"""
Unit tests for the Record Parser.
"""

import pytest
from unittest.mock import patch
from src.agents.block_splitter import split_into_blocks
from src.agents.record_parser import RecordParser, parse_records
from src.models.extraction_config import ExtractionConfig


@pytest.fixture
def parser():
    return RecordParser()


def test_full_record_with_feedback():
    """Identifier, unit, score, comment and feedback all extracted."""
    text = (
        "#12345 SBRSPX1Z Score header 8 Comment: Great service "
        "Feedback 1: Thanks! #12346 SBRSPX1Z ..."
    )

    result = parse_records(split_into_blocks(text))

    assert len(result.records) == 1
    record = result.records[0]
    assert record.id == "12345"
    assert record.unit_code == "SBRSPX1Z"
    assert record.score == 8
    assert record.comment == "Great service"
    assert record.leader_feedback == "Thanks!"
    # Trailing fragment is discarded, not reported as an error
    assert result.rejected_count == 1
    assert result.skipped == []


def test_boilerplate_comment_is_neutered_not_dropped(parser):
    block = "#100002 SBRSPMOEM02 Cliente B 17/10/2026 Detrator 3\nComentário: Sem contato\n"

    record = parser.parse_block(block)

    assert record is not None
    assert record.id == "100002"
    assert record.unit_code == "SBRSPMOEM02"
    assert record.score == 3
    assert record.comment == ""


def test_sentinel_replaces_invalid_comment():
    parser = RecordParser(ExtractionConfig(invalid_comment_sentinel="[Sem Comentário Válido]"))
    block = "#100002 SBRSPMOEM02 Cliente B 17/10/2026 Detrator 3\nComentário: ok\n"

    assert parser.parse_block(block).comment == "[Sem Comentário Válido]"


def test_short_block_is_rejected(parser):
    block = "#12345 SBRSPX1Z 8 Comment: ok"
    assert len(block) < 50

    assert parser.parse_block(block) is None


def test_block_without_unit_prefix_is_rejected(parser):
    block = "#12345 Relatório gerado automaticamente pelo sistema de pesquisa 8"

    assert parser.parse_block(block) is None


def test_prefix_without_unit_code_is_rejected(parser):
    """The prefix alone, with no uppercase/digit suffix, is not a unit code."""
    block = "#12345 SBRSP sem código de unidade válido nesta linha Comment: teste"

    assert parser.parse_block(block) is None


def test_block_without_identifier_is_rejected(parser):
    block = "Página 2 SBRSPX1Z resumo da unidade com comentários agregados aqui"

    assert parser.parse_block(block) is None


def test_comment_without_feedback(parser):
    block = "#12345 SBRSPX1Z Nota 7 Comment: Fila demorada,\nmas resolveram o problema"

    record = parser.parse_block(block)

    assert record.comment == "Fila demorada, mas resolveram o problema"
    assert record.leader_feedback == ""
    assert record.score == 7


def test_last_standalone_number_is_score(parser):
    block = "#12345 SBRSPX1Z Registro 3 2026 9 Comment: Atendimento muito bom"

    assert parser.parse_block(block).score == 9


def test_numbers_inside_larger_numbers_ignored(parser):
    block = "#12345 SBRSPX1Z protocolo 2026 e 1234567 Comment: Atendimento rápido"

    assert parser.parse_block(block).score is None


def test_ten_is_a_score(parser):
    block = "#12345 SBRSPX1Z Cliente Promotor 10 Comment: Tudo perfeito sempre"

    assert parser.parse_block(block).score == 10


def test_ordinal_indicator_does_not_hide_score(parser):
    for ordinal in ("ª", "º"):
        block = f"#12345 SBRSPX1Z Avaliação 9{ordinal} Comentário: Atendimento muito bom"

        assert parser.parse_block(block).score == 9


def test_marker_inside_longer_word_is_not_a_marker(parser):
    block = "#12345 SBRSPX1Z Nota 8 Commentary: none Comment: Ótimo atendimento"

    record = parser.parse_block(block)

    assert record.score == 8
    assert record.comment == "Ótimo atendimento"


def test_unicode_line_breaks_collapsed_in_both_sections(parser):
    block = (
        "#12345 SBRSPX1Z Nota 9 Comentário: Bom\u2028atendimento\x0cgeral "
        "Feedback 1: Obrigado\x85pelo\u2029retorno"
    )

    record = parser.parse_block(block)

    assert record.comment == "Bom atendimento geral"
    assert record.leader_feedback == "Obrigado pelo retorno"


def test_no_comment_marker(parser):
    """Record still emitted; score, comment and feedback are empty."""
    block = "#12345 SBRSPX1Z Cliente D 15/10/2026 Promotor 10 sem seção de texto"

    record = parser.parse_block(block)

    assert record.id == "12345"
    assert record.score is None
    assert record.comment == ""
    assert record.leader_feedback == ""


def test_feedback_before_comment_marker_is_ignored(parser):
    block = "#12345 SBRSPX1Z Feedback: antigo 6 Comment: Muito bom atendimento"

    record = parser.parse_block(block)

    assert record.comment == "Muito bom atendimento"
    assert record.leader_feedback == ""
    assert record.score == 6


def test_feedback_without_number(parser):
    block = "#12345 SBRSPX1Z Nota 5 Comentário: Demorou bastante\nFeedback: Vamos melhorar\na fila"

    record = parser.parse_block(block)

    assert record.comment == "Demorou bastante"
    assert record.leader_feedback == "Vamos melhorar a fila"


def test_only_first_identifier_and_unit_used(parser):
    block = "#12345 SBRSPX1Z 9 Comment: Ver protocolo #987 e unidade SBRSPY2 depois"

    record = parser.parse_block(block)

    assert record.id == "12345"
    assert record.unit_code == "SBRSPX1Z"
    assert record.comment == "Ver protocolo #987 e unidade SBRSPY2 depois"


def test_custom_markers():
    config = ExtractionConfig(
        unit_code_prefix="UNIT",
        comment_markers=("Observação",),
        feedback_marker_pattern=r"Resposta\s*\d*:"
    )
    block = "#55555 UNITAB12 Nota 4 Observação: Produto chegou quebrado Resposta 2: Enviamos outro"

    record = RecordParser(config).parse_block(block)

    assert record.unit_code == "UNITAB12"
    assert record.score == 4
    assert record.comment == "Produto chegou quebrado"
    assert record.leader_feedback == "Enviamos outro"


def test_block_error_is_skipped_and_reported(sample_report):
    """An unexpected error in one block doesn't abort the rest."""
    parser = RecordParser()
    real_extract = parser._extract_score

    def flaky(block, marker_start):
        if block.startswith("#100002"):
            raise RuntimeError("boom")
        return real_extract(block, marker_start)

    with patch.object(parser, "_extract_score", side_effect=flaky):
        result = parser.parse(split_into_blocks(sample_report))

    assert [r.id for r in result.records] == ["100001", "100003"]
    assert len(result.skipped) == 1
    skipped = result.skipped[0]
    assert skipped.index == 2
    assert skipped.reason == "RuntimeError: boom"
    assert skipped.excerpt.startswith("#100002 SBRSPMOEM02")
    assert "\n" not in skipped.excerpt


def test_sample_report(sample_report):
    result = parse_records(split_into_blocks(sample_report))

    assert [r.id for r in result.records] == ["100001", "100002", "100003"]
    assert [r.score for r in result.records] == [9, 3, 7]
    assert result.records[0].leader_feedback == "Obrigado pelo retorno!"
    assert result.records[1].comment == ""
    assert result.records[2].comment == "A fila estava muito longa."
    assert result.rejected_count == 1


def _many_records(count):
    return "".join(
        f"#{200000 + i} SBRSPU{i % 7} Cliente {i} Nota {i % 11}\n"
        f"Comentário: Comentário número {i}\nsegunda linha\n"
        f"Feedback 1: Resposta {i}\n"
        for i in range(count)
    )


def test_properties_hold_on_many_records():
    """Order, score range and single-line fields."""
    text = _many_records(60)

    result = parse_records(split_into_blocks(text))

    assert [r.id for r in result.records] == [str(200000 + i) for i in range(60)]
    for record in result.records:
        assert record.score is None or 0 <= record.score <= 10
        assert "\n" not in record.comment and "\r" not in record.comment
        assert "\n" not in record.leader_feedback


def test_parallel_parsing_keeps_document_order():
    blocks = split_into_blocks(_many_records(80))

    sequential = RecordParser(ExtractionConfig(workers=1)).parse(blocks)
    parallel = RecordParser(ExtractionConfig(workers=4)).parse(blocks)

    assert parallel.records == sequential.records
    assert len(parallel.records) == 80


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
