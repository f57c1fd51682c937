# ============================================================
# 📦 src/sales_analytics/domain/entity_aggregator.py
# ============================================================

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from loguru import logger

from sales_analytics.domain.kpi_calculator import calcular_kpis, calcular_tendencia_entidade
from sales_analytics.domain.periodo import ReferencePeriod
from sales_analytics.entities.kpi_entities import EntityStats, SupplierStats
from sales_analytics.entities.sale_record import SaleRecord


# Chaves que não identificam entidade nenhuma
CHAVES_INVALIDAS = {"", "N/A", "undefined"}


@dataclass
class _Grupo:
    nome: str
    regiao: str
    setor: str
    registros: list = field(default_factory=list)


# ============================================================
# 🧮 Agregação genérica por chave
# ============================================================
def agregar_por_entidade(
    registros: Iterable[SaleRecord],
    chave: Callable[[SaleRecord], Optional[str]],
    periodo: ReferencePeriod,
    nome: Optional[Callable[[SaleRecord, str], Optional[str]]] = None,
) -> list[EntityStats]:
    """
    Agrupa por `chave` e compara o mês atual com a média da janela de comparação.
    - `nome(registro, chave)` pode fornecer o nome de exibição (ex.: razão social).
    - Resultado ordenado por faturamento atual (desc).
    """
    grupos: dict[str, _Grupo] = {}

    for r in registros:
        k = chave(r)
        if not k or k in CHAVES_INVALIDAS:
            continue
        grupo = grupos.get(k)
        if grupo is None:
            grupo = grupos[k] = _Grupo(nome=k, regiao=r.regiao, setor=r.setor)
        grupo.registros.append(r)
        if nome:
            n = nome(r, k)
            if n:
                grupo.nome = n

    resultado = [_estatisticas_grupo(k, g, periodo) for k, g in grupos.items()]
    resultado.sort(key=lambda e: e.faturamento_atual, reverse=True)

    logger.debug(f"🏢 {len(resultado)} entidades agregadas (mês atual={periodo.mes_atual}).")
    return resultado


def _estatisticas_grupo(chave: str, grupo: _Grupo, periodo: ReferencePeriod) -> EntityStats:
    por_mes: dict[str, list] = {}
    for r in grupo.registros:
        por_mes.setdefault(r.mes, []).append(r)

    atual = calcular_kpis(por_mes.get(periodo.mes_atual, []))
    historico = [calcular_kpis(por_mes.get(m, [])).faturamento for m in periodo.meses_comparacao]
    media_historica = sum(historico) / periodo.tamanho_janela

    return EntityStats(
        id=chave,
        nome=grupo.nome,
        faturamento_atual=atual.faturamento,
        media_historica=media_historica,
        tendencia=calcular_tendencia_entidade(atual.faturamento, media_historica),
        positivacao=atual.positivacao,
        pedidos=atual.pedidos,
        ticket_medio=atual.ticket_medio,
        sku_por_pdv=atual.sku_por_pdv,
        parcela_media=atual.parcela_media,
        prazo_medio=atual.prazo_medio,
        regiao=grupo.regiao,
        setor=grupo.setor,
    )


# ============================================================
# 🎯 Especializações usadas pelo painel
# ============================================================
def _razao_social(r: SaleRecord, chave: str) -> Optional[str]:
    # Nome da última linha do cliente com razão social preenchida
    if r.razao_social and chave == r.cnpj:
        return r.razao_social
    return None


def estatisticas_clientes(registros: Iterable[SaleRecord], periodo: ReferencePeriod) -> list[EntityStats]:
    return agregar_por_entidade(registros, lambda r: r.cnpj, periodo, nome=_razao_social)


def estatisticas_redes(registros: Iterable[SaleRecord], periodo: ReferencePeriod) -> list[EntityStats]:
    return agregar_por_entidade(registros, lambda r: r.rede, periodo)


def estatisticas_representantes(registros: Iterable[SaleRecord], periodo: ReferencePeriod) -> list[EntityStats]:
    return agregar_por_entidade(registros, lambda r: r.representante, periodo)


def estatisticas_fornecedores(registros: Iterable[SaleRecord], periodo: ReferencePeriod) -> list[SupplierStats]:
    """Igual às demais entidades + quantidade de SKUs distintos vendidos no mês atual."""
    registros = list(registros)
    base = agregar_por_entidade(registros, lambda r: r.fornecedor, periodo)

    skus: dict[str, set] = {}
    for r in registros:
        if r.is_venda and r.mes == periodo.mes_atual:
            skus.setdefault(r.fornecedor, set()).add(r.cod_produto)

    resultado = [
        SupplierStats(**e.as_dict(), qtd_skus=len(skus.get(e.id, ())))
        for e in base
    ]
    resultado.sort(key=lambda s: s.faturamento_atual, reverse=True)
    return resultado
