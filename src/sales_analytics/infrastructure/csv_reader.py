# sales_analytics/src/sales_analytics/infrastructure/csv_reader.py

import os
import pandas as pd
from loguru import logger

from sales_analytics.domain.record_normalizer import RecordNormalizer
from sales_analytics.entities.sale_record import SaleRecord


def detectar_separador(path: str) -> str:
    """Detecta automaticamente o separador do CSV."""
    with open(path, "r", encoding="utf-8-sig") as f:
        linha = f.readline()
        return ";" if ";" in linha else ","


def carregar_linhas(path: str) -> list[dict]:
    """Lê o CSV exportado da planilha mantendo todas as células como texto."""
    if not path or not os.path.exists(path):
        raise FileNotFoundError(f"❌ Arquivo não encontrado: {path}")

    sep = detectar_separador(path)
    df = pd.read_csv(
        path,
        sep=sep,
        dtype=str,
        keep_default_na=False,
        encoding="utf-8-sig",
        skip_blank_lines=True,
    )
    df.columns = df.columns.str.strip()

    logger.info(f"📄 {len(df)} linhas lidas de {os.path.basename(path)} (sep='{sep}').")
    return df.to_dict(orient="records")


def carregar_registros(path: str, normalizer: RecordNormalizer | None = None) -> list[SaleRecord]:
    normalizer = normalizer or RecordNormalizer()
    return normalizer.normalizar_linhas(carregar_linhas(path))
