# ============================================================
# 📦 src/sales_analytics/entities/sale_record.py
# ============================================================

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Canal(str, Enum):
    RC = "RC"     # Representante Comercial
    WEB = "WEB"   # Vendas pelo site
    VD = "VD"     # Venda direta
    TV = "TV"     # Televendas


class ClasseOperacao(str, Enum):
    VENDA = "VD"
    DEVOLUCAO = "DV"


@dataclass(frozen=True)
class SaleRecord:
    """
    Linha de nota fiscal normalizada (venda ou devolução).
    O `valor` já vem com o sinal correto (devolução negativa), nunca
    deve ser re-sinalizado a partir da classe de operação.
    """

    # ============================================================
    # Identificação
    # ============================================================
    id: str
    data: str  # ISO YYYY-MM-DD

    # ============================================================
    # Estrutura comercial
    # ============================================================
    regiao: str
    divisao: str
    setor: str
    representante: str
    canal: Canal
    fornecedor: str

    # ============================================================
    # Cliente / produto
    # ============================================================
    cnpj: str
    razao_social: str
    cod_produto: str
    descricao_produto: str

    # ============================================================
    # Valores da operação
    # ============================================================
    valor: float
    quantidade: int
    pedido: str
    classe_oper: ClasseOperacao
    prazos: str
    rede: str

    # ============================================================
    # Localização (opcional)
    # ============================================================
    cidade: Optional[str] = None
    uf: Optional[str] = None

    @property
    def mes(self) -> str:
        """Chave YYYY-MM da data da nota."""
        return self.data[:7]

    @property
    def is_venda(self) -> bool:
        return self.classe_oper == ClasseOperacao.VENDA

    @property
    def is_devolucao(self) -> bool:
        return self.classe_oper == ClasseOperacao.DEVOLUCAO
