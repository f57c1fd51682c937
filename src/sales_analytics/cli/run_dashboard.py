# ============================================================
# 📦 src/sales_analytics/cli/run_dashboard.py
# ============================================================

import argparse
import sys
from loguru import logger

from sales_analytics.application.dashboard_use_case import DashboardUseCase
from sales_analytics.config.settings import carregar_settings
from sales_analytics.domain.filter_service import FilterState
from sales_analytics.domain.geo_resolver import carregar_gazetteer
from sales_analytics.domain.periodo import ReferencePeriod
from sales_analytics.infrastructure.csv_reader import carregar_registros
from sales_analytics.logs.logging_config import setup_logging
from sales_analytics.reporting.dashboard_report import DashboardReport


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Gera o painel de KPIs comerciais a partir de um CSV de notas (vendas + devoluções)"
    )

    # ======================================================
    # 📥 Entrada e período
    # ======================================================
    parser.add_argument("--arquivo", type=str, required=True, help="CSV exportado da planilha de vendas")
    parser.add_argument("--mes_referencia", type=str, default=None, help="Mês atual (YYYY-MM). Padrão: último mês da base")
    parser.add_argument("--meses_comparacao", type=int, default=None, help="Tamanho da janela de comparação (meses)")
    parser.add_argument("--mes_inicio", type=str, default=None, help="Início do intervalo filtrado (YYYY-MM)")
    parser.add_argument("--mes_fim", type=str, default=None, help="Fim do intervalo filtrado (YYYY-MM)")

    # ======================================================
    # 🔍 Filtros (repetíveis)
    # ======================================================
    for dim in ("divisao", "regiao", "setor", "representante", "canal", "fornecedor"):
        parser.add_argument(f"--{dim}", action="append", default=[], help=f"Filtra {dim} (pode repetir)")
    parser.add_argument("--busca", type=str, default="", help="Texto para filtrar as tabelas")

    # ======================================================
    # 💾 Saída
    # ======================================================
    parser.add_argument("--saida", type=str, default=None, help="Diretório dos relatórios")
    parser.add_argument("--sem_exportar", action="store_true", help="Só calcula e loga os KPIs")
    return parser


def main(argv=None):
    args = _parser().parse_args(argv)

    try:
        settings = carregar_settings()
    except ValueError as e:
        setup_logging()
        logger.error(str(e))
        sys.exit(1)

    setup_logging(settings.log_level)
    logger.info(f"🚀 Iniciando painel de vendas | arquivo={args.arquivo}")

    # ======================================================
    # 🧩 Carrega base e gazetteer
    # ======================================================
    try:
        registros = carregar_registros(args.arquivo)
        gazetteer = carregar_gazetteer(settings.gazetteer_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    if not registros:
        logger.error("❌ Nenhum registro válido na base.")
        sys.exit(1)

    # ======================================================
    # 📅 Período de referência
    # ======================================================
    n_meses = args.meses_comparacao or settings.meses_comparacao
    mes_referencia = args.mes_referencia or settings.mes_referencia
    try:
        if mes_referencia:
            periodo = ReferencePeriod.a_partir_de(mes_referencia, n_meses)
        else:
            periodo = ReferencePeriod.ultimo_mes(registros, n_meses)
    except ValueError as e:
        logger.error(f"❌ Período inválido: {e}")
        sys.exit(1)

    if periodo is None:
        logger.error("❌ Nenhum mês válido (YYYY-MM) encontrado nas datas da base.")
        sys.exit(1)

    filtros = FilterState(
        divisao=args.divisao,
        regiao=args.regiao,
        setor=args.setor,
        representante=args.representante,
        canal=args.canal,
        fornecedor=args.fornecedor,
        mes_inicio=args.mes_inicio or periodo.mes_inicio,
        mes_fim=args.mes_fim or periodo.mes_fim,
    )

    # ======================================================
    # ▶️ Executa
    # ======================================================
    resultado = DashboardUseCase(registros, gazetteer, periodo=periodo).executar(filtros, busca=args.busca)

    k = resultado.kpis_atual
    t = resultado.tendencias
    logger.info(f"💰 Faturamento ({periodo.mes_atual}): R$ {k.faturamento:,.2f} ({t['faturamento']:+.1f}% vs. média)")
    logger.info(f"👥 Positivação: {k.positivacao:.0f} clientes ({t['positivacao']:+.1f}%)")
    logger.info(f"📈 Ticket médio: R$ {k.ticket_medio:,.2f} ({t['ticket_medio']:+.1f}%)")
    logger.info(f"📊 SKU x PDV: {k.sku_por_pdv:.2f} ({t['sku_por_pdv']:+.1f}%)")
    logger.info(f"🗓️ Prazo médio: {k.prazo_medio:.0f} dias | Parcela média: {k.parcela_media:.1f}x")

    if not args.sem_exportar:
        DashboardReport(args.saida or settings.output_dir).exportar(resultado)

    logger.success("🏁 Painel concluído.")


if __name__ == "__main__":
    main()
