# ============================================================
# 📦 src/sales_analytics/domain/filter_service.py
# ============================================================

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from sales_analytics.entities.sale_record import SaleRecord


TODOS = "all"

DIMENSOES = ("divisao", "regiao", "setor", "representante", "canal", "fornecedor")


@dataclass(frozen=True)
class FilterState:
    """
    Estado do filtro multi-dimensional.
    Dimensão vazia (ou contendo "all") = sem restrição.
    Intervalo de meses fechado [mes_inicio, mes_fim], comparado como prefixo YYYY-MM.
    """
    divisao: tuple[str, ...] = ()
    regiao: tuple[str, ...] = ()
    setor: tuple[str, ...] = ()
    representante: tuple[str, ...] = ()
    canal: tuple[str, ...] = ()
    fornecedor: tuple[str, ...] = ()
    mes_inicio: str = "0000-00"
    mes_fim: str = "9999-99"

    def __post_init__(self):
        for dim in DIMENSOES:
            object.__setattr__(self, dim, tuple(getattr(self, dim) or ()))

    def com_meses(self, mes_inicio: str, mes_fim: str) -> "FilterState":
        return replace(self, mes_inicio=mes_inicio, mes_fim=mes_fim)


@dataclass(frozen=True)
class CascadingOptions:
    divisao: list[str] = field(default_factory=list)
    regiao: list[str] = field(default_factory=list)
    setor: list[str] = field(default_factory=list)
    representante: list[str] = field(default_factory=list)
    canal: list[str] = field(default_factory=list)
    fornecedor: list[str] = field(default_factory=list)


# ============================================================
# 🔍 Predicados
# ============================================================
def _valor_dimensao(registro: SaleRecord, dimensao: str) -> str:
    valor = getattr(registro, dimensao)
    # Canal é Enum (str); usa o valor textual
    return getattr(valor, "value", valor)


def _aceita(valor: str, aceitos: tuple[str, ...]) -> bool:
    if not aceitos or TODOS in aceitos:
        return True
    return valor in aceitos


def _no_intervalo(registro: SaleRecord, filtros: FilterState) -> bool:
    return filtros.mes_inicio <= registro.mes <= filtros.mes_fim


def _passa(registro: SaleRecord, filtros: FilterState, ignorar: Optional[str] = None) -> bool:
    if not _no_intervalo(registro, filtros):
        return False
    for dim in DIMENSOES:
        if dim == ignorar:
            continue
        if not _aceita(_valor_dimensao(registro, dim), getattr(filtros, dim)):
            return False
    return True


# ============================================================
# 🚦 Operações públicas
# ============================================================
def filtrar_registros(registros: Iterable[SaleRecord], filtros: FilterState) -> list[SaleRecord]:
    return [r for r in registros if _passa(r, filtros)]


def opcoes_dimensao(registros: Iterable[SaleRecord], filtros: FilterState, dimensao: str) -> list[str]:
    """
    Valores ainda alcançáveis da dimensão, aplicando o período e todos os
    OUTROS filtros ativos (o filtro da própria dimensão é ignorado).
    """
    if dimensao not in DIMENSOES:
        raise KeyError(f"Dimensão desconhecida: {dimensao}")

    valores = {
        _valor_dimensao(r, dimensao)
        for r in registros
        if _passa(r, filtros, ignorar=dimensao)
    }
    return sorted(v for v in valores if v)


def opcoes_em_cascata(registros: Iterable[SaleRecord], filtros: FilterState) -> CascadingOptions:
    registros = list(registros)
    return CascadingOptions(**{dim: opcoes_dimensao(registros, filtros, dim) for dim in DIMENSOES})
