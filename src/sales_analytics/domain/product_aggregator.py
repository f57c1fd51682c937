# ============================================================
# 📦 src/sales_analytics/domain/product_aggregator.py
# ============================================================

from dataclasses import dataclass, field
from typing import Iterable

from sales_analytics.domain.periodo import ReferencePeriod
from sales_analytics.entities.kpi_entities import ProductStats
from sales_analytics.entities.sale_record import SaleRecord


@dataclass
class _Acumulador:
    codigo: str
    descricao: str
    fornecedor: str
    divisao: str
    faturamento: float = 0.0
    quantidade: int = 0
    clientes: set = field(default_factory=set)
    pedidos: set = field(default_factory=set)


def estatisticas_produtos(registros: Iterable[SaleRecord], periodo: ReferencePeriod) -> list[ProductStats]:
    """
    Ranking de produtos no mês atual.
    - faturamento: soma do valor (DV já negativo)
    - quantidade: |qtd| somada em VD, subtraída em DV
    - clientes/pedidos distintos: apenas linhas de venda
    """
    mapa: dict[str, _Acumulador] = {}

    for r in registros:
        if r.mes != periodo.mes_atual:
            continue

        acc = mapa.get(r.cod_produto)
        if acc is None:
            acc = mapa[r.cod_produto] = _Acumulador(
                codigo=r.cod_produto,
                descricao=r.descricao_produto,
                fornecedor=r.fornecedor,
                divisao=r.divisao,
            )

        qtd = abs(r.quantidade)
        acc.faturamento += r.valor
        acc.quantidade += -qtd if r.is_devolucao else qtd

        if r.is_venda:
            acc.clientes.add(r.cnpj)
            acc.pedidos.add(r.pedido)

    produtos = [
        ProductStats(
            codigo=a.codigo,
            descricao=a.descricao,
            faturamento=a.faturamento,
            quantidade=a.quantidade,
            fornecedor=a.fornecedor,
            divisao=a.divisao,
            qtd_clientes=len(a.clientes),
            qtd_pedidos=len(a.pedidos),
        )
        for a in mapa.values()
    ]
    return sorted(produtos, key=lambda p: p.faturamento, reverse=True)
