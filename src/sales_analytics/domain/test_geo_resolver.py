# tests/sales_analytics/domain/test_geo_resolver.py

import pytest

from sales_analytics.domain.geo_resolver import carregar_gazetteer, estatisticas_geo
from sales_analytics.domain.utils_texto import normalizar_cidade
from sales_analytics.entities.sale_record import ClasseOperacao


def test_normalizar_cidade():
    assert normalizar_cidade("  São Paulo ") == "SAO PAULO"
    assert normalizar_cidade("Curitiba - PR") == "CURITIBA"
    assert normalizar_cidade("Florianópolis/SC") == "FLORIANOPOLIS"
    assert normalizar_cidade("") == ""


def test_sem_uf_resolve_igual_a_com_uf(gazetteer):
    assert gazetteer.coordenadas("São Paulo", "") == gazetteer.coordenadas("SAO PAULO", "SP")
    assert gazetteer.coordenadas("São Paulo", "") == (-23.5329, -46.6395)


def test_sem_uf_usa_primeira_entrada_homonima(gazetteer):
    assert gazetteer.resolver("Turvo").uf == "PR"
    assert gazetteer.resolver("Turvo", "sc").uf == "SC"


def test_uf_errada_nao_resolve(gazetteer):
    assert gazetteer.resolver("Curitiba", "SP") is None
    assert gazetteer.resolver("Atlântida", "") is None


def test_estatisticas_geo_agrega_por_cidade_resolvida(registro, gazetteer):
    registros = [
        registro(cidade="São Paulo", uf="", valor=100.0),
        registro(cidade="SAO PAULO", uf="SP", valor=50.0),
        registro(cidade="Sao Paulo", uf="SP", valor=-30.0, classe_oper=ClasseOperacao.DEVOLUCAO),
        registro(cidade="Curitiba", uf="PR", valor=500.0),
        registro(cidade="Cidade Inexistente", uf="PR", valor=1000.0),
        registro(cidade="", uf="PR", valor=1000.0),
    ]
    geo = estatisticas_geo(registros, gazetteer)

    assert [(g.cidade, g.uf) for g in geo] == [("CURITIBA", "PR"), ("SAO PAULO", "SP")]
    sp = geo[1]
    assert sp.faturamento == pytest.approx(120.0)
    assert sp.positivacao == 2
    assert (sp.lat, sp.lon) == (-23.5329, -46.6395)


def test_gazetteer_empacotado_carrega():
    gazetteer = carregar_gazetteer()
    assert len(gazetteer) > 900
    assert gazetteer.coordenadas("Porto Alegre", "RS") == pytest.approx((-30.0318, -51.2065))


def test_gazetteer_inexistente(tmp_path):
    with pytest.raises(FileNotFoundError):
        carregar_gazetteer(tmp_path / "nao_existe.csv")


def test_gazetteer_sem_colunas(tmp_path):
    arquivo = tmp_path / "ruim.csv"
    arquivo.write_text("estado,nome\nPR,CURITIBA\n", encoding="utf-8")
    with pytest.raises(ValueError):
        carregar_gazetteer(arquivo)
