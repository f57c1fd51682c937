#sales_analytics/src/sales_analytics/reporting/exporters/csv_exporter.py

import os
import pandas as pd
from loguru import logger


class CSVExporter:
    """
    Exporta tabelas do painel em CSV compatível com Excel (pt-BR: separador ';').
    """

    @staticmethod
    def export(df: pd.DataFrame, destino: str, nome_base: str = "tabela"):
        if df is None or df.empty:
            logger.warning(f"⚠️ Tabela '{nome_base}' vazia — nada a exportar.")
            return None

        # =========================================================
        # Destino pode ser o arquivo final ou um diretório
        # =========================================================
        if destino.endswith(".csv"):
            output_path = destino
            pasta = os.path.dirname(output_path)
            if pasta:
                os.makedirs(pasta, exist_ok=True)
        else:
            os.makedirs(destino, exist_ok=True)
            output_path = os.path.join(destino, f"{nome_base}.csv")

        # =========================================================
        # Arredonda colunas numéricas sem alterar o DataFrame original
        # =========================================================
        df = df.copy()
        num_cols = df.select_dtypes(include=["float"]).columns
        df[num_cols] = df[num_cols].round(2)

        df.to_csv(
            output_path,
            index=False,
            sep=";",
            encoding="utf-8-sig",
            float_format="%.2f",
        )

        logger.success(f"✅ CSV salvo em {output_path}")
        return output_path
