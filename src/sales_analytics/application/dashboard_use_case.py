# ============================================================
# 📦 src/sales_analytics/application/dashboard_use_case.py
# ============================================================

from dataclasses import dataclass
from typing import Optional, Sequence

from loguru import logger

from sales_analytics.domain.entity_aggregator import (
    estatisticas_clientes,
    estatisticas_fornecedores,
    estatisticas_redes,
    estatisticas_representantes,
)
from sales_analytics.domain.filter_service import (
    CascadingOptions,
    FilterState,
    filtrar_registros,
    opcoes_em_cascata,
)
from sales_analytics.domain.geo_resolver import Gazetteer, estatisticas_geo
from sales_analytics.domain.kpi_calculator import calcular_kpis, calcular_tendencia, log_kpis, media_kpis
from sales_analytics.domain.monthly_evolution import evolucao_mensal
from sales_analytics.domain.periodo import ReferencePeriod
from sales_analytics.domain.pivot_builder import construir_pivot_setorial
from sales_analytics.domain.product_aggregator import estatisticas_produtos
from sales_analytics.entities.kpi_entities import (
    EntityStats,
    GeoStats,
    KPIStats,
    MonthlyMetric,
    ProductStats,
    SupplierStats,
    TopItem,
)
from sales_analytics.entities.pivot_entities import PivotSetorial
from sales_analytics.entities.sale_record import SaleRecord


# Métricas exibidas nos cards com comparação vs. média
METRICAS_TENDENCIA = ("faturamento", "positivacao", "ticket_medio", "sku_por_pdv")


@dataclass(frozen=True)
class DashboardResult:
    periodo: ReferencePeriod
    total_registros: int
    kpis_atual: KPIStats
    kpis_media: KPIStats
    tendencias: dict[str, float]
    opcoes: CascadingOptions
    pivot: PivotSetorial
    evolucao: list[MonthlyMetric]
    clientes: list[EntityStats]
    produtos: list[ProductStats]
    fornecedores: list[SupplierStats]
    redes: list[EntityStats]
    representantes: list[EntityStats]
    geo: list[GeoStats]
    busca: str = ""

    def top_itens(self, n: int = 5) -> dict[str, list[TopItem]]:
        """Destaques consumidos pelo gerador de insights (serviço externo)."""
        return {
            "clientes": [
                TopItem(id=c.id, nome=c.nome, valor=c.faturamento_atual, sub_valor=c.pedidos)
                for c in self.clientes[:n]
            ],
            "produtos": [
                TopItem(id=p.codigo, nome=p.descricao, valor=p.faturamento, sub_valor=p.quantidade)
                for p in self.produtos[:n]
            ],
            "representantes": [
                TopItem(id=r.id, nome=r.nome, valor=r.faturamento_atual, sub_valor=r.pedidos)
                for r in self.representantes[:n]
            ],
        }


# ============================================================
# 🔎 Busca textual nas tabelas
# ============================================================
def _buscar_entidades(itens: Sequence[EntityStats], termo: str, incluir_id: bool = False) -> list:
    if not termo:
        return list(itens)
    t = termo.lower()
    return [
        e for e in itens
        if t in e.nome.lower() or (incluir_id and termo in e.id)
    ]


def _buscar_produtos(itens: Sequence[ProductStats], termo: str) -> list[ProductStats]:
    if not termo:
        return list(itens)
    t = termo.lower()
    return [p for p in itens if t in p.descricao.lower() or termo in p.codigo]


# ============================================================
# 📦 CLASSE PRINCIPAL
# ============================================================
class DashboardUseCase:
    """
    Recalcula todo o painel a partir da base em memória para um estado de filtro.
    Nada é guardado entre chamadas (exceto o gazetteer, imutável).
    """

    def __init__(
        self,
        registros: Sequence[SaleRecord],
        gazetteer: Gazetteer,
        periodo: Optional[ReferencePeriod] = None,
        meses_comparacao: int = 3,
    ):
        self.registros = list(registros)
        self.gazetteer = gazetteer
        self.periodo = periodo or ReferencePeriod.ultimo_mes(self.registros, meses_comparacao)

    # ------------------------------------------------------------
    def _kpis_mes(self, filtros: FilterState, mes: str) -> KPIStats:
        return calcular_kpis(filtrar_registros(self.registros, filtros.com_meses(mes, mes)))

    def executar(self, filtros: Optional[FilterState] = None, busca: str = "") -> Optional[DashboardResult]:
        if self.periodo is None:
            logger.warning("⚠️ Base vazia — nada a calcular.")
            return None

        periodo = self.periodo
        filtros = filtros or FilterState(mes_inicio=periodo.mes_inicio, mes_fim=periodo.mes_fim)
        busca = (busca or "").strip()

        logger.info(
            f"🚀 Recalculando painel | mês atual={periodo.mes_atual} | "
            f"comparação={', '.join(periodo.meses_comparacao)}"
        )

        # ============================================================
        # 1️⃣ Cards: mês atual vs. média da janela
        # ============================================================
        kpis_atual = self._kpis_mes(filtros, periodo.mes_atual)
        kpis_media = media_kpis(
            [self._kpis_mes(filtros, m) for m in periodo.meses_comparacao],
            divisor=periodo.tamanho_janela,
        )
        tendencias = {
            m: calcular_tendencia(kpis_atual.valor(m), kpis_media.valor(m))
            for m in METRICAS_TENDENCIA
        }
        log_kpis(kpis_atual, f"KPIs {periodo.mes_atual}")
        log_kpis(kpis_media, "KPIs média")

        # ============================================================
        # 2️⃣ Período completo filtrado → matriz, tabelas e mapa
        # ============================================================
        filtrados = filtrar_registros(self.registros, filtros)
        logger.info(f"🔍 {len(filtrados)} de {len(self.registros)} registros após filtros.")

        clientes = estatisticas_clientes(filtrados, periodo)
        produtos = estatisticas_produtos(filtrados, periodo)
        fornecedores = estatisticas_fornecedores(filtrados, periodo)
        redes = estatisticas_redes(filtrados, periodo)

        resultado = DashboardResult(
            periodo=periodo,
            total_registros=len(filtrados),
            kpis_atual=kpis_atual,
            kpis_media=kpis_media,
            tendencias=tendencias,
            opcoes=opcoes_em_cascata(self.registros, filtros),
            pivot=construir_pivot_setorial(filtrados, periodo),
            evolucao=evolucao_mensal(filtrados),
            clientes=_buscar_entidades(clientes, busca, incluir_id=True),
            produtos=_buscar_produtos(produtos, busca),
            fornecedores=_buscar_entidades(fornecedores, busca),
            redes=_buscar_entidades(redes, busca),
            representantes=estatisticas_representantes(filtrados, periodo),
            geo=estatisticas_geo(filtrados, self.gazetteer),
            busca=busca,
        )

        logger.success(
            f"✅ Painel pronto: {len(resultado.clientes)} clientes | {len(resultado.produtos)} produtos | "
            f"{len(resultado.geo)} cidades no mapa."
        )
        return resultado
