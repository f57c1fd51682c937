# tests/sales_analytics/domain/test_payment_terms.py

from datetime import date

import pytest

from sales_analytics.domain.payment_terms import TipoPrazo, classificar_prazos


def test_dias_numericos():
    prazo = classificar_prazos("30-60-90")
    assert prazo.tipo == TipoPrazo.DIAS_NUMERICOS
    assert prazo.parcelas == 3
    assert prazo.prazo_medio(date(2025, 11, 1)) == pytest.approx(60.0)


def test_dias_fora_da_faixa_sao_ignorados():
    prazo = classificar_prazos("0/28/2500")
    assert prazo.parcelas == 3
    assert prazo.dias == (28,)
    assert prazo.prazo_medio(None) == pytest.approx(28.0)


def test_datas_explicitas():
    prazo = classificar_prazos("01/12/2025 31/12/2025")
    assert prazo.tipo == TipoPrazo.DATAS_EXPLICITAS
    assert prazo.parcelas == 2
    assert prazo.prazo_medio(date(2025, 11, 1)) == pytest.approx(45.0)


def test_datas_explicitas_com_estouro_de_dia():
    # 31/02 vira 03/03 (2025 não é bissexto)
    prazo = classificar_prazos("31/02/2025")
    assert prazo.vencimentos == (date(2025, 3, 3),)


def test_texto_nao_interpretavel_conta_parcela_mas_nao_prazo():
    prazo = classificar_prazos("A VISTA")
    assert prazo.tipo == TipoPrazo.NAO_INTERPRETAVEL
    assert prazo.parcelas == 1
    assert prazo.prazo_medio(date(2025, 11, 1)) is None


def test_texto_vazio():
    prazo = classificar_prazos("")
    assert prazo.parcelas == 0
    assert prazo.prazo_medio(date(2025, 11, 1)) is None
