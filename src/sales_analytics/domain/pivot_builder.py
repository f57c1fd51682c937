# ============================================================
# 📦 src/sales_analytics/domain/pivot_builder.py
# ============================================================

from typing import Iterable

from loguru import logger

from sales_analytics.domain.kpi_calculator import calcular_kpis, media_kpis
from sales_analytics.domain.periodo import ReferencePeriod
from sales_analytics.entities.kpi_entities import KPIStats
from sales_analytics.entities.pivot_entities import PivotRow, PivotSetorial
from sales_analytics.entities.sale_record import SaleRecord


def _media_janela(por_mes: dict[str, KPIStats], periodo: ReferencePeriod) -> KPIStats:
    # Mês sem movimento entra como zero; divisor é sempre o tamanho da janela
    return media_kpis(
        [por_mes.get(m, KPIStats.vazio()) for m in periodo.meses_comparacao],
        divisor=periodo.tamanho_janela,
    )


def construir_pivot_setorial(registros: Iterable[SaleRecord], periodo: ReferencePeriod) -> PivotSetorial:
    registros = list(registros)

    meses = sorted({r.mes for r in registros})
    setores = sorted({r.setor for r in registros})

    # ============================================================
    # 🔹 Totais por mês (todas as linhas do mês)
    # ============================================================
    por_mes: dict[str, list] = {}
    por_setor_mes: dict[tuple[str, str], list] = {}
    for r in registros:
        por_mes.setdefault(r.mes, []).append(r)
        por_setor_mes.setdefault((r.setor, r.mes), []).append(r)

    totais_mes = {m: calcular_kpis(por_mes[m]) for m in meses}

    # ============================================================
    # 🔹 Linhas por setor
    # ============================================================
    linhas = []
    for setor in setores:
        kpis_mes = {m: calcular_kpis(por_setor_mes.get((setor, m), [])) for m in meses}
        linhas.append(PivotRow(setor=setor, meses=kpis_mes, media=_media_janela(kpis_mes, periodo)))

    linhas.sort(key=lambda linha: linha.media.faturamento, reverse=True)

    logger.debug(f"🧩 Pivot setorial: {len(linhas)} setores × {len(meses)} meses.")

    return PivotSetorial(
        meses=meses,
        linhas=linhas,
        totais_mes=totais_mes,
        media_geral=_media_janela(totais_mes, periodo),
    )
