# sales_analytics/src/sales_analytics/conftest.py

import itertools

import pytest

from sales_analytics.domain.geo_resolver import gazetteer_de_mapa
from sales_analytics.entities.sale_record import Canal, ClasseOperacao, SaleRecord


@pytest.fixture
def registro():
    """Fábrica de SaleRecord com valores padrão; sobrescreva só o que o teste precisa."""
    seq = itertools.count()

    def _novo(**kwargs) -> SaleRecord:
        n = next(seq)
        classe = kwargs.pop("classe_oper", ClasseOperacao.VENDA)
        base = dict(
            id=f"ROW-{n}",
            data="2025-11-10",
            regiao="SUL",
            divisao="FARMA",
            setor="S01",
            representante="REP A",
            canal=Canal.RC,
            fornecedor="FORN A",
            cnpj="11111111000111",
            razao_social="FARMACIA CENTRAL",
            cod_produto="P1",
            descricao_produto="DIPIRONA 500MG",
            valor=100.0,
            quantidade=1,
            pedido=f"PED-{n}",
            classe_oper=classe,
            prazos="",
            rede="Independente",
            cidade="",
            uf="",
        )
        base.update(kwargs)
        return SaleRecord(**base)

    return _novo


@pytest.fixture
def gazetteer():
    return gazetteer_de_mapa({
        ("CURITIBA", "PR"): (-25.4195, -49.2646),
        ("SAO PAULO", "SP"): (-23.5329, -46.6395),
        ("TURVO", "PR"): (-25.0437, -51.5282),
        ("TURVO", "SC"): (-28.9272, -49.6831),
    })
