# tests/sales_analytics/domain/test_filter_service.py

from sales_analytics.domain.filter_service import (
    FilterState,
    filtrar_registros,
    opcoes_dimensao,
    opcoes_em_cascata,
)
from sales_analytics.entities.sale_record import Canal


def _base(registro):
    return [
        registro(data="2025-08-05", regiao="SUL", setor="S01", canal=Canal.RC, fornecedor="EMS"),
        registro(data="2025-09-05", regiao="SUL", setor="S02", canal=Canal.WEB, fornecedor="EUROFARMA"),
        registro(data="2025-10-05", regiao="SUDESTE", setor="S03", canal=Canal.RC, fornecedor="EMS"),
        registro(data="2025-11-05", regiao="SUDESTE", setor="S03", canal=Canal.TV, fornecedor="ACHE"),
    ]


def test_sem_filtros_passa_tudo(registro):
    base = _base(registro)
    assert filtrar_registros(base, FilterState()) == base


def test_sentinela_all_libera_dimensao(registro):
    base = _base(registro)
    assert filtrar_registros(base, FilterState(regiao=("all", "SUL"))) == base


def test_filtro_multivalor_e_intervalo_de_meses(registro):
    base = _base(registro)
    filtros = FilterState(fornecedor=("EMS", "ACHE"), mes_inicio="2025-09", mes_fim="2025-11")

    resultado = filtrar_registros(base, filtros)
    assert [r.data for r in resultado] == ["2025-10-05", "2025-11-05"]


def test_filtro_por_canal_usa_valor_textual(registro):
    base = _base(registro)
    resultado = filtrar_registros(base, FilterState(canal=("RC",)))
    assert len(resultado) == 2


def test_filtro_idempotente(registro):
    base = _base(registro)
    filtros = FilterState(regiao=("SUDESTE",), mes_inicio="2025-08", mes_fim="2025-10")
    uma_vez = filtrar_registros(base, filtros)
    assert filtrar_registros(uma_vez, filtros) == uma_vez


def test_opcoes_ignoram_o_proprio_filtro(registro):
    base = _base(registro)
    filtros = FilterState(regiao=("SUL",))

    opcoes = opcoes_em_cascata(base, filtros)

    # Região continua mostrando todas as alternativas
    assert opcoes.regiao == ["SUDESTE", "SUL"]
    # Demais dimensões só mostram o que é alcançável com regiao=SUL
    assert opcoes.setor == ["S01", "S02"]
    assert opcoes.fornecedor == ["EMS", "EUROFARMA"]
    assert opcoes.canal == ["RC", "WEB"]


def test_opcoes_respeitam_intervalo_e_sao_alcancaveis(registro):
    base = _base(registro)
    filtros = FilterState(canal=("RC",), mes_inicio="2025-10", mes_fim="2025-11")

    setores = opcoes_dimensao(base, filtros, "setor")
    assert setores == ["S03"]
    for setor in setores:
        escolhido = FilterState(canal=("RC",), setor=(setor,), mes_inicio="2025-10", mes_fim="2025-11")
        assert filtrar_registros(base, escolhido)


def test_opcoes_descartam_vazios(registro):
    base = [registro(fornecedor=""), registro(fornecedor="EMS")]
    assert opcoes_dimensao(base, FilterState(), "fornecedor") == ["EMS"]
