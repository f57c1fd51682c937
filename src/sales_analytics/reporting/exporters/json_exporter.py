#sales_analytics/src/sales_analytics/reporting/exporters/json_exporter.py

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from loguru import logger


def _serializar(obj):
    """Projeções do painel (dataclasses), enums e caminhos viram JSON nativo."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, set):
        return sorted(obj)
    return str(obj)


class JSONExporter:
    """
    Grava o resumo do painel em JSON legível (UTF-8, sem escapar acentos).
    Aceita dataclasses aninhadas diretamente (KPIStats, TopItem, MonthlyMetric...).
    """

    @staticmethod
    def export(data, output_path: str, casas_decimais: int = 2):
        if not data:
            logger.warning("⚠️ Resumo vazio — JSON não gerado.")
            return None

        conteudo = json.loads(json.dumps(data, default=_serializar))
        conteudo = _arredondar(conteudo, casas_decimais)

        destino = Path(output_path)
        destino.parent.mkdir(parents=True, exist_ok=True)
        destino.write_text(json.dumps(conteudo, ensure_ascii=False, indent=2), encoding="utf-8")

        logger.success(f"✅ Resumo JSON salvo em {destino}")
        return str(destino)


def _arredondar(valor, casas: int):
    if isinstance(valor, float):
        return round(valor, casas)
    if isinstance(valor, dict):
        return {k: _arredondar(v, casas) for k, v in valor.items()}
    if isinstance(valor, list):
        return [_arredondar(v, casas) for v in valor]
    return valor
