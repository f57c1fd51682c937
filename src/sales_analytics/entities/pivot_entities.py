# ============================================================
# 📦 src/sales_analytics/entities/pivot_entities.py
# ============================================================

from dataclasses import dataclass, field

from sales_analytics.entities.kpi_entities import KPIStats, METRICAS_RAZAO


@dataclass(frozen=True)
class PivotRow:
    setor: str
    meses: dict[str, KPIStats]
    media: KPIStats  # média simples dos meses fechados

    def valor_mes(self, mes: str, metrica: str) -> float:
        kpi = self.meses.get(mes)
        return kpi.valor(metrica) if kpi else 0.0


@dataclass(frozen=True)
class PivotSetorial:
    """
    Matriz setor × mês usada nas tabelas de calor.
    Totais de coluna: métricas aditivas somam, métricas de razão
    (ticket, SKU x PDV, prazo, parcela) viram média das linhas exibidas.
    """
    meses: list[str]
    linhas: list[PivotRow]
    totais_mes: dict[str, KPIStats] = field(default_factory=dict)
    media_geral: KPIStats = field(default_factory=KPIStats)

    def linhas_ordenadas(self, metrica: str = "faturamento") -> list[PivotRow]:
        return sorted(self.linhas, key=lambda linha: linha.media.valor(metrica), reverse=True)

    def total_coluna(self, mes: str, metrica: str) -> float:
        if not self.linhas:
            return 0.0
        soma = sum(linha.valor_mes(mes, metrica) for linha in self.linhas)
        return soma / len(self.linhas) if metrica in METRICAS_RAZAO else soma

    def total_geral(self, metrica: str) -> float:
        if not self.linhas:
            return 0.0
        soma = sum(linha.media.valor(metrica) for linha in self.linhas)
        return soma / len(self.linhas) if metrica in METRICAS_RAZAO else soma
