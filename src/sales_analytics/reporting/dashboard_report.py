# ============================================================
# 📦 src/sales_analytics/reporting/dashboard_report.py
# ============================================================

import os
from dataclasses import asdict
from datetime import datetime
from typing import Sequence

import pandas as pd
from loguru import logger

from sales_analytics.application.dashboard_use_case import DashboardResult
from sales_analytics.entities.kpi_entities import KPIStats
from sales_analytics.entities.pivot_entities import PivotSetorial
from sales_analytics.reporting.exporters.csv_exporter import CSVExporter
from sales_analytics.reporting.exporters.json_exporter import JSONExporter


def para_dataframe(itens: Sequence) -> pd.DataFrame:
    """Lista de dataclasses (EntityStats, ProductStats, GeoStats...) → DataFrame."""
    return pd.DataFrame([asdict(i) for i in itens])


def pivot_para_dataframe(pivot: PivotSetorial, metrica: str = "faturamento") -> pd.DataFrame:
    """
    Tabela larga: uma linha por setor, uma coluna por mês + coluna 'media'.
    A última linha ('TOTAL') traz os totais de coluna (soma ou média, conforme a métrica).
    """
    linhas = []
    for linha in pivot.linhas_ordenadas(metrica):
        item = {"setor": linha.setor}
        for mes in pivot.meses:
            item[mes] = linha.valor_mes(mes, metrica)
        item["media"] = linha.media.valor(metrica)
        linhas.append(item)

    if linhas:
        total = {"setor": "TOTAL"}
        for mes in pivot.meses:
            total[mes] = pivot.total_coluna(mes, metrica)
        total["media"] = pivot.total_geral(metrica)
        linhas.append(total)

    return pd.DataFrame(linhas, columns=["setor", *pivot.meses, "media"])


class DashboardReport:
    """
    Exporta o painel calculado:
      - uma tabela CSV por visão (clientes, produtos, fornecedores, redes, representantes, geo)
      - uma matriz setor × mês por KPI
      - resumo.json com cards, tendências e destaques
    """

    def __init__(self, output_dir: str = "output/reports"):
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.pasta_output = os.path.join(output_dir, f"painel_{timestamp}")

    # =========================================================
    # 1️⃣ Resumo (cards + destaques)
    # =========================================================
    @staticmethod
    def montar_resumo(resultado: DashboardResult) -> dict:
        return {
            "mes_atual": resultado.periodo.mes_atual,
            "meses_comparacao": resultado.periodo.meses_comparacao,
            "total_registros": resultado.total_registros,
            "kpis_atual": resultado.kpis_atual,
            "kpis_media": resultado.kpis_media,
            "tendencias": resultado.tendencias,
            "top": resultado.top_itens(),
            "evolucao": resultado.evolucao,
        }

    # =========================================================
    # 2️⃣ Exporta CSVs e JSON
    # =========================================================
    def exportar(self, resultado: DashboardResult) -> dict[str, str]:
        if resultado is None:
            logger.warning("⚠️ Nenhum resultado para exportar.")
            return {}

        os.makedirs(self.pasta_output, exist_ok=True)
        arquivos = {}

        tabelas = {
            "clientes": resultado.clientes,
            "produtos": resultado.produtos,
            "fornecedores": resultado.fornecedores,
            "redes": resultado.redes,
            "representantes": resultado.representantes,
            "geo": resultado.geo,
        }
        for nome, itens in tabelas.items():
            caminho = CSVExporter.export(para_dataframe(itens), self.pasta_output, nome_base=nome)
            if caminho:
                arquivos[nome] = caminho

        for metrica in KPIStats.metricas():
            nome = f"pivot_{metrica}"
            caminho = CSVExporter.export(
                pivot_para_dataframe(resultado.pivot, metrica), self.pasta_output, nome_base=nome
            )
            if caminho:
                arquivos[nome] = caminho

        resumo = JSONExporter.export(
            self.montar_resumo(resultado), os.path.join(self.pasta_output, "resumo.json")
        )
        if resumo:
            arquivos["resumo"] = resumo

        logger.success(f"💾 Painel exportado em 📁 {self.pasta_output} ({len(arquivos)} arquivos)")
        return arquivos
