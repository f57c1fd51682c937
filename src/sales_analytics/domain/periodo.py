# ============================================================
# 📦 src/sales_analytics/domain/periodo.py
# ============================================================

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from sales_analytics.entities.sale_record import SaleRecord


NOMES_MESES = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]

_MES_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def deslocar_mes(mes: str, delta: int) -> str:
    """'2025-01' deslocado de -1 → '2024-12'."""
    ano, m = int(mes[:4]), int(mes[5:7])
    total = ano * 12 + (m - 1) + delta
    return f"{total // 12:04d}-{total % 12 + 1:02d}"


def nome_mes(mes: str) -> str:
    try:
        return NOMES_MESES[int(mes[5:7]) - 1]
    except (ValueError, IndexError):
        return mes


@dataclass(frozen=True)
class ReferencePeriod:
    """
    Mês corrente + janela de comparação (meses fechados).
    Ex.: mes_atual='2025-11', meses_comparacao=('2025-08', '2025-09', '2025-10').
    """
    mes_atual: str
    meses_comparacao: tuple[str, ...]

    def __post_init__(self):
        if not self.meses_comparacao:
            raise ValueError("❌ Janela de comparação vazia.")
        object.__setattr__(self, "meses_comparacao", tuple(self.meses_comparacao))

    @classmethod
    def a_partir_de(cls, mes_atual: str, n_meses: int = 3) -> "ReferencePeriod":
        """Janela = os n meses imediatamente anteriores ao mês atual."""
        if not _MES_RE.match(mes_atual or ""):
            raise ValueError(f"❌ Mês de referência inválido: {mes_atual} (esperado YYYY-MM)")
        if n_meses < 1:
            raise ValueError(f"❌ n_meses deve ser >= 1 (recebido {n_meses})")
        janela = tuple(deslocar_mes(mes_atual, -i) for i in range(n_meses, 0, -1))
        return cls(mes_atual=mes_atual, meses_comparacao=janela)

    @classmethod
    def ultimo_mes(
        cls, registros: Iterable[SaleRecord], n_meses: int = 3
    ) -> Optional["ReferencePeriod"]:
        meses = {r.mes for r in registros if _MES_RE.match(r.mes)}
        if not meses:
            return None
        return cls.a_partir_de(max(meses), n_meses)

    @property
    def tamanho_janela(self) -> int:
        return len(self.meses_comparacao)

    @property
    def mes_inicio(self) -> str:
        return min(self.meses_comparacao + (self.mes_atual,))

    @property
    def mes_fim(self) -> str:
        return max(self.meses_comparacao + (self.mes_atual,))
