# ============================================================
# 📦 src/sales_analytics/domain/monthly_evolution.py
# ============================================================

from typing import Iterable

from sales_analytics.domain.kpi_calculator import calcular_kpis
from sales_analytics.domain.periodo import nome_mes
from sales_analytics.entities.kpi_entities import KPIStats, MonthlyMetric
from sales_analytics.entities.sale_record import SaleRecord


def _agrupar_por_mes(registros: Iterable[SaleRecord]) -> dict[str, list]:
    grupos: dict[str, list] = {}
    for r in registros:
        grupos.setdefault(r.mes, []).append(r)
    return grupos


def evolucao_mensal(registros: Iterable[SaleRecord]) -> list[MonthlyMetric]:
    resultado = []
    for mes, lista in sorted(_agrupar_por_mes(registros).items()):
        kpis = calcular_kpis(lista)
        resultado.append(
            MonthlyMetric(
                nome=nome_mes(mes),
                chave_mes=mes,
                faturamento=kpis.faturamento,
                positivacao=kpis.positivacao,
                ticket_medio=kpis.ticket_medio,
                sku_por_pdv=kpis.sku_por_pdv,
            )
        )
    return resultado


def evolucao_mensal_por_setor(registros: Iterable[SaleRecord]) -> list[dict]:
    """Uma linha por mês: {"nome", "chave_mes", "setores": {setor: KPIStats}}."""
    resultado = []
    for mes, lista in sorted(_agrupar_por_mes(registros).items()):
        por_setor: dict[str, list] = {}
        for r in lista:
            por_setor.setdefault(r.setor or "N/A", []).append(r)

        setores: dict[str, KPIStats] = {s: calcular_kpis(rs) for s, rs in sorted(por_setor.items())}
        resultado.append({"nome": nome_mes(mes), "chave_mes": mes, "setores": setores})
    return resultado
