# ============================================================
# 📦 src/sales_analytics/config/settings.py
# ============================================================

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


GAZETTEER_PADRAO = Path(__file__).resolve().parent / "data" / "cidades_coordenadas.csv"

_MES_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


@dataclass(frozen=True)
class Settings:
    mes_referencia: Optional[str]
    meses_comparacao: int
    gazetteer_path: Path
    output_dir: str
    log_level: str


# =====================================================
# ⚙️ Carregamento a partir do ambiente (.env opcional)
# =====================================================
def carregar_settings() -> Settings:
    """
    Lê a configuração do ambiente.
    SALES_REFERENCE_MONTH vazio = usar o último mês presente na base.
    """
    load_dotenv()

    mes_referencia = os.getenv("SALES_REFERENCE_MONTH", "").strip() or None
    if mes_referencia and not _MES_RE.match(mes_referencia):
        raise ValueError(f"❌ SALES_REFERENCE_MONTH inválido: {mes_referencia} (esperado YYYY-MM)")

    bruto = os.getenv("SALES_COMPARISON_MONTHS", "3")
    try:
        meses_comparacao = int(bruto)
    except ValueError:
        raise ValueError(f"❌ SALES_COMPARISON_MONTHS inválido: {bruto}")
    if meses_comparacao < 1:
        raise ValueError(f"❌ SALES_COMPARISON_MONTHS deve ser >= 1 (recebido {meses_comparacao})")

    return Settings(
        mes_referencia=mes_referencia,
        meses_comparacao=meses_comparacao,
        gazetteer_path=Path(os.getenv("SALES_GAZETTEER_PATH") or GAZETTEER_PADRAO),
        output_dir=os.getenv("SALES_OUTPUT_DIR", "output/reports"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
