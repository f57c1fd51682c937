# tests/sales_analytics/domain/test_entity_aggregator.py

import pytest

from sales_analytics.domain.entity_aggregator import (
    agregar_por_entidade,
    estatisticas_clientes,
    estatisticas_fornecedores,
    estatisticas_redes,
)
from sales_analytics.domain.periodo import ReferencePeriod
from sales_analytics.entities.sale_record import ClasseOperacao

PERIODO = ReferencePeriod.a_partir_de("2025-11")


def test_tendencia_vs_media_da_janela(registro):
    registros = [
        registro(rede="REDE A", data="2025-08-10", valor=100.0),
        registro(rede="REDE A", data="2025-09-10", valor=200.0),
        registro(rede="REDE A", data="2025-10-10", valor=300.0),
        registro(rede="REDE A", data="2025-11-10", valor=300.0),
    ]
    [rede] = estatisticas_redes(registros, PERIODO)

    assert rede.id == "REDE A"
    assert rede.faturamento_atual == pytest.approx(300.0)
    assert rede.media_historica == pytest.approx(200.0)
    assert rede.tendencia == pytest.approx(50.0)
    assert rede.pedidos == 1


def test_sem_historico_tendencia_100_ou_0(registro):
    registros = [
        registro(representante="NOVO", data="2025-11-01", valor=10.0),
        registro(representante="PARADO", data="2025-07-01", valor=10.0),
    ]
    por_id = {e.id: e for e in agregar_por_entidade(registros, lambda r: r.representante, PERIODO)}

    assert por_id["NOVO"].tendencia == 100.0
    assert por_id["PARADO"].tendencia == 0.0
    assert por_id["PARADO"].faturamento_atual == 0


def test_chaves_invalidas_sao_ignoradas(registro):
    registros = [registro(fornecedor="N/A"), registro(fornecedor=""), registro(fornecedor="EMS")]
    assert [e.id for e in estatisticas_fornecedores(registros, PERIODO)] == ["EMS"]


def test_ordenado_por_faturamento_atual(registro):
    registros = [
        registro(cnpj="A", valor=10.0),
        registro(cnpj="B", valor=50.0),
        registro(cnpj="C", valor=30.0),
    ]
    assert [e.id for e in estatisticas_clientes(registros, PERIODO)] == ["B", "C", "A"]


def test_cliente_usa_razao_social_como_nome(registro):
    registros = [registro(cnpj="123", razao_social="DROGARIA BOM PRECO")]
    [cliente] = estatisticas_clientes(registros, PERIODO)
    assert cliente.nome == "DROGARIA BOM PRECO"
    assert cliente.regiao == "SUL"


def test_fornecedor_conta_skus_vendidos_no_mes_atual(registro):
    registros = [
        registro(fornecedor="EMS", cod_produto="P1"),
        registro(fornecedor="EMS", cod_produto="P2"),
        registro(fornecedor="EMS", cod_produto="P2"),
        registro(fornecedor="EMS", cod_produto="P3", valor=-5.0, classe_oper=ClasseOperacao.DEVOLUCAO),
        registro(fornecedor="EMS", cod_produto="P4", data="2025-10-01"),
    ]
    [ems] = estatisticas_fornecedores(registros, PERIODO)
    assert ems.qtd_skus == 2


def test_media_historica_negativa_nao_inverte_tendencia(registro):
    registros = [
        registro(rede="REDE A", data="2025-08-10", valor=-300.0, classe_oper=ClasseOperacao.DEVOLUCAO),
        registro(rede="REDE A", data="2025-11-10", valor=50.0),
        registro(rede="REDE B", data="2025-09-10", valor=-90.0, classe_oper=ClasseOperacao.DEVOLUCAO),
    ]
    por_id = {e.id: e for e in estatisticas_redes(registros, PERIODO)}

    assert por_id["REDE A"].media_historica == pytest.approx(-100.0)
    assert por_id["REDE A"].tendencia == 100.0
    assert por_id["REDE B"].tendencia == 0.0
