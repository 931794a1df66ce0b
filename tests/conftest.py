"""
Shared fixtures: a small report in the layout produced by the PDF extractor.
"""

import pytest

REPORT_HEADER = (
    "Relatório de Pesquisas NPS - Regional São Paulo\n"
    "Gerado em 18/10/2026 Página 1\n"
)

RECORD_PROMOTER = (
    "#100001 SBRSPCBNF01 Cliente A 18/10/2026 Promotor 9\n"
    "Comentário: Atendimento excelente, equipe muito atenciosa.\n"
    "Feedback 1: Obrigado pelo retorno!\n"
)

RECORD_NO_CONTACT = (
    "#100002 SBRSPMOEM02 Cliente B 17/10/2026 Detrator 3\n"
    "Comentário: Sem contato\n"
)

RECORD_MULTILINE = (
    "#100003 SBRSPCBNF01 Cliente C 16/10/2026 Neutro 7\n"
    "Comentário: A fila estava\n"
    "muito longa.\n"
)


@pytest.fixture
def sample_report():
    """Header followed by three records."""
    return REPORT_HEADER + RECORD_PROMOTER + RECORD_NO_CONTACT + RECORD_MULTILINE
