# ============================================================
# 📦 src/sales_analytics/domain/payment_terms.py
# ============================================================
# Interpretação do texto livre de "Prazos" / "Cond. Pagto".
# Dois formatos convivem na base:
#   - vencimentos explícitos: "15/12/2025 15/01/2026"
#   - dias corridos:          "30-60-90", "28/56"
# ============================================================

import re
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Optional


_DATA_RE = re.compile(r"(\d{2})/(\d{2})/(\d{4})")
_SEPARADOR_RE = re.compile(r"[-/]")
_INT_RE = re.compile(r"^\s*([+-]?\d+)")

DIA_MIN_EXCLUSIVO = 0
DIA_MAX_EXCLUSIVO = 2000


class TipoPrazo(str, Enum):
    DATAS_EXPLICITAS = "datas_explicitas"
    DIAS_NUMERICOS = "dias_numericos"
    NAO_INTERPRETAVEL = "nao_interpretavel"


def _data_com_estouro(dia: int, mes: int, ano: int) -> Optional[date]:
    """
    Monta a data deixando dia/mês estourarem para o período seguinte
    (31/02 → 03/03), como as planilhas de origem fazem.
    """
    ano_ajustado = ano + (mes - 1) // 12
    mes_ajustado = (mes - 1) % 12 + 1
    try:
        return date(ano_ajustado, mes_ajustado, 1) + timedelta(days=dia - 1)
    except (ValueError, OverflowError):
        return None


def _parse_int(token: str) -> Optional[int]:
    m = _INT_RE.match(token)
    return int(m.group(1)) if m else None


@dataclass(frozen=True)
class PrazoPagamento:
    tipo: TipoPrazo
    parcelas: int
    vencimentos: tuple[date, ...] = ()
    dias: tuple[int, ...] = ()

    def prazo_medio(self, data_nf: Optional[date]) -> Optional[float]:
        """Média de dias até o vencimento. None quando não há como calcular."""
        if self.tipo == TipoPrazo.DATAS_EXPLICITAS:
            if data_nf is None or not self.vencimentos:
                return None
            total = sum((v - data_nf).days for v in self.vencimentos)
            return total / len(self.vencimentos)

        if self.tipo == TipoPrazo.DIAS_NUMERICOS:
            return sum(self.dias) / len(self.dias)

        return None


def classificar_prazos(texto: Optional[str]) -> PrazoPagamento:
    """Classifica o texto uma única vez; os cálculos de KPI só despacham pelo tipo."""
    if not texto:
        return PrazoPagamento(TipoPrazo.NAO_INTERPRETAVEL, parcelas=0)

    datas = _DATA_RE.findall(texto)
    if datas:
        vencimentos = tuple(
            v for v in (_data_com_estouro(int(d), int(m), int(a)) for d, m, a in datas)
            if v is not None
        )
        return PrazoPagamento(
            TipoPrazo.DATAS_EXPLICITAS,
            parcelas=len(datas),
            vencimentos=vencimentos,
        )

    partes = _SEPARADOR_RE.split(texto)
    parcelas = sum(1 for p in partes if p.strip())

    dias = []
    for parte in partes:
        n = _parse_int(parte)
        if n is not None and DIA_MIN_EXCLUSIVO < n < DIA_MAX_EXCLUSIVO:
            dias.append(n)

    if dias:
        return PrazoPagamento(TipoPrazo.DIAS_NUMERICOS, parcelas=parcelas, dias=tuple(dias))

    return PrazoPagamento(TipoPrazo.NAO_INTERPRETAVEL, parcelas=parcelas)


def parse_data_nf(data_iso: str) -> Optional[date]:
    try:
        return date.fromisoformat(data_iso)
    except (TypeError, ValueError):
        return None
