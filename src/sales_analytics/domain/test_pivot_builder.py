# tests/sales_analytics/domain/test_pivot_builder.py

import pytest

from sales_analytics.domain.periodo import ReferencePeriod
from sales_analytics.domain.pivot_builder import construir_pivot_setorial

PERIODO = ReferencePeriod.a_partir_de("2025-11")


def _base(registro):
    return [
        # S01: 2 pedidos em agosto, 1 em novembro
        registro(setor="S01", data="2025-08-01", pedido="A1", valor=300.0),
        registro(setor="S01", data="2025-08-02", pedido="A2", valor=300.0),
        registro(setor="S01", data="2025-11-01", pedido="A3", valor=100.0),
        # S02: 1 pedido por mês na janela
        registro(setor="S02", data="2025-08-01", pedido="B1", valor=100.0),
        registro(setor="S02", data="2025-09-01", pedido="B2", valor=100.0),
        registro(setor="S02", data="2025-10-01", pedido="B3", valor=100.0),
    ]


def test_meses_setores_e_media_da_janela(registro):
    pivot = construir_pivot_setorial(_base(registro), PERIODO)

    assert pivot.meses == ["2025-08", "2025-09", "2025-10", "2025-11"]
    assert [linha.setor for linha in pivot.linhas] == ["S01", "S02"]

    s01 = pivot.linhas[0]
    # Novembro fica fora da média; meses vazios entram como zero
    assert s01.media.faturamento == pytest.approx(200.0)
    assert s01.media.ticket_medio == pytest.approx(100.0)
    assert s01.valor_mes("2025-09", "faturamento") == 0


def test_totais_de_coluna_somam_aditivas_e_fazem_media_das_razoes(registro):
    pivot = construir_pivot_setorial(_base(registro), PERIODO)

    assert pivot.total_coluna("2025-08", "faturamento") == pytest.approx(700.0)
    assert pivot.total_coluna("2025-08", "pedidos") == pytest.approx(3.0)
    # Ticket de agosto: S01 = 300, S02 = 100 → média 200 (não soma)
    assert pivot.total_coluna("2025-08", "ticket_medio") == pytest.approx(200.0)


def test_total_geral_usa_medias_das_linhas(registro):
    pivot = construir_pivot_setorial(_base(registro), PERIODO)

    assert pivot.total_geral("faturamento") == pytest.approx(200.0 + 100.0)
    assert pivot.total_geral("ticket_medio") == pytest.approx((100.0 + 100.0) / 2)


def test_totais_mes_e_media_geral(registro):
    pivot = construir_pivot_setorial(_base(registro), PERIODO)

    assert pivot.totais_mes["2025-08"].faturamento == pytest.approx(700.0)
    assert pivot.media_geral.faturamento == pytest.approx(900.0 / 3)


def test_linhas_ordenadas_por_outra_metrica(registro):
    pivot = construir_pivot_setorial(_base(registro), PERIODO)
    assert [linha.setor for linha in pivot.linhas_ordenadas("pedidos")] == ["S02", "S01"]


def test_pivot_vazio(registro):
    pivot = construir_pivot_setorial([], PERIODO)
    assert pivot.linhas == []
    assert pivot.total_coluna("2025-08", "ticket_medio") == 0.0
    assert pivot.total_geral("faturamento") == 0.0
