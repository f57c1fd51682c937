# ============================================================
# 📦 src/sales_analytics/domain/kpi_calculator.py
# ============================================================

from collections import defaultdict
from typing import Iterable, Sequence

from loguru import logger

from sales_analytics.domain.payment_terms import classificar_prazos, parse_data_nf
from sales_analytics.entities.kpi_entities import KPIStats
from sales_analytics.entities.sale_record import SaleRecord


# ============================================================
# 💡 Bateria de KPIs sobre um subconjunto de registros
# ============================================================
def calcular_kpis(registros: Iterable[SaleRecord]) -> KPIStats:
    """
    Calcula os sete KPIs. Nunca levanta exceção: base vazia ou degenerada
    resulta em zeros.
    """
    registros = list(registros)
    if not registros:
        return KPIStats.vazio()

    # 1. Faturamento líquido (devoluções já vêm negativas)
    faturamento = sum(r.valor for r in registros)

    # 2. Positivação: saldo líquido do cliente > 0
    saldo_cliente: dict[str, float] = defaultdict(float)
    for r in registros:
        saldo_cliente[r.cnpj] += r.valor
    positivados = [cnpj for cnpj, saldo in saldo_cliente.items() if saldo > 0]
    positivacao = len(positivados)

    vendas = [r for r in registros if r.is_venda]
    devolucoes = [r for r in registros if r.is_devolucao]

    # 3. Pedidos líquidos (VD - DV), nunca negativo
    pedidos = max(0, len({r.pedido for r in vendas}) - len({r.pedido for r in devolucoes}))

    # 4. Ticket médio
    ticket_medio = faturamento / pedidos if pedidos > 0 else 0.0

    # 5. SKU x PDV (somente clientes positivados)
    sku_por_pdv = _sku_por_pdv(registros, positivados)

    # 6/7. Parcela e prazo médios ponderados pelo valor (somente vendas)
    parcela_media = _parcela_media(vendas)
    prazo_medio = _prazo_medio(vendas)

    return KPIStats(
        faturamento=faturamento,
        positivacao=positivacao,
        pedidos=pedidos,
        ticket_medio=ticket_medio,
        sku_por_pdv=sku_por_pdv,
        parcela_media=parcela_media,
        prazo_medio=prazo_medio,
    )


def _sku_por_pdv(registros: Sequence[SaleRecord], positivados: Sequence[str]) -> float:
    if not positivados:
        return 0.0

    skus_vd: dict[str, set] = defaultdict(set)
    skus_dv: dict[str, set] = defaultdict(set)
    for r in registros:
        if r.is_venda:
            skus_vd[r.cnpj].add(r.cod_produto)
        else:
            skus_dv[r.cnpj].add(r.cod_produto)

    # 15 SKUs vendidos e 3 devolvidos → 12
    total = sum(max(0, len(skus_vd[c]) - len(skus_dv[c])) for c in positivados)
    return total / len(positivados)


def _parcela_media(vendas: Sequence[SaleRecord]) -> float:
    ponderado = 0.0
    peso = 0.0
    for r in vendas:
        parcelas = classificar_prazos(r.prazos).parcelas
        if parcelas > 0:
            ponderado += parcelas * r.valor
            peso += r.valor
    return ponderado / peso if peso > 0 else 0.0


def _prazo_medio(vendas: Sequence[SaleRecord]) -> float:
    ponderado = 0.0
    peso = 0.0
    prazo_por_pedido: dict[str, float | None] = {}

    for r in vendas:
        if not r.prazos or not r.data:
            continue

        # Todas as linhas do pedido compartilham o prazo da primeira
        if r.pedido not in prazo_por_pedido:
            prazo = classificar_prazos(r.prazos)
            prazo_por_pedido[r.pedido] = prazo.prazo_medio(parse_data_nf(r.data))

        dias = prazo_por_pedido[r.pedido]
        if dias is None or dias < 0:
            continue

        ponderado += dias * r.valor
        peso += r.valor

    return ponderado / peso if peso > 0 else 0.0


# ============================================================
# 📉 Médias e tendências
# ============================================================
def media_kpis(lista: Sequence[KPIStats], divisor: int | None = None) -> KPIStats:
    """
    Média aritmética simples, campo a campo, de KPIs de períodos.
    Não é um recálculo ponderado: ticket médio da média = média dos tickets.
    """
    divisor = divisor or len(lista)
    if not divisor:
        return KPIStats.vazio()

    somas = {m: 0.0 for m in KPIStats.metricas()}
    for kpi in lista:
        for m in somas:
            somas[m] += kpi.valor(m)
    return KPIStats(**{m: v / divisor for m, v in somas.items()})


def calcular_tendencia(atual: float, base: float) -> float:
    """Variação percentual vs. base. Base zero: 100% se houve crescimento, senão 0%."""
    if base == 0:
        return 100.0 if atual > 0 else 0.0
    return (atual - base) / base * 100


def calcular_tendencia_entidade(atual: float, base: float) -> float:
    """Tendência de cliente/rede/representante: só há variação com média histórica positiva."""
    if base > 0:
        return (atual - base) / base * 100
    return 100.0 if atual > 0 else 0.0


def log_kpis(kpis: KPIStats, rotulo: str = "KPIs"):
    logger.debug(
        f"📊 {rotulo}: faturamento={kpis.faturamento:,.2f} | positivação={kpis.positivacao:.0f} | "
        f"pedidos={kpis.pedidos:.0f} | ticket={kpis.ticket_medio:,.2f} | sku/pdv={kpis.sku_por_pdv:.2f} | "
        f"parcelas={kpis.parcela_media:.2f} | prazo={kpis.prazo_medio:.1f}d"
    )
