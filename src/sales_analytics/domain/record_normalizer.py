# ============================================================
# 📦 src/sales_analytics/domain/record_normalizer.py
# ============================================================

import re
from typing import Iterable, Mapping, Optional

import pandas as pd
from loguru import logger

from sales_analytics.config.column_aliases import COLUNAS, PADROES
from sales_analytics.entities.sale_record import Canal, ClasseOperacao, SaleRecord


_ISO_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_BR_DATA_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


# ============================================================
# 🔢 Parsers de campo (nunca levantam exceção)
# ============================================================
def parse_valor(bruto) -> float:
    """
    Converte valores monetários do ERP em float.
    "R$ 1.234,56" → 1234.56 | "-R$ 1.000,00" → -1000.0 | "100,50" → 100.5
    """
    if bruto is None:
        return 0.0
    s = str(bruto).strip()
    if not s:
        return 0.0

    negativo = "-" in s

    s = re.sub(r"R\$", "", s, flags=re.IGNORECASE).strip()
    limpo = re.sub(r"[^0-9,.]", "", s)

    # Formato brasileiro: ponto = milhar, vírgula = decimal
    if "," in limpo and "." in limpo:
        limpo = limpo.replace(".", "").replace(",", ".", 1)
    elif "," in limpo:
        limpo = limpo.replace(",", ".", 1)

    # Só o prefixo numérico conta ("1.234.5" → 1.234)
    m = _FLOAT_RE.match(limpo)
    if not m:
        logger.debug(f"⚠️ Valor monetário inválido: {bruto!r} → 0")
        return 0.0
    num = float(m.group(0))

    return -abs(num) if negativo else num


def parse_data(bruto) -> str:
    """Aceita ISO (YYYY-MM-DD) ou DD/MM/YYYY. Qualquer outro formato → ''."""
    if not bruto:
        return ""
    s = str(bruto).strip()
    if _ISO_RE.match(s):
        return s
    m = _BR_DATA_RE.match(s)
    if m:
        dia, mes, ano = m.groups()
        return f"{ano}-{int(mes):02d}-{int(dia):02d}"
    return ""


def parse_quantidade(bruto) -> int:
    if bruto is None:
        return 0
    m = _INT_RE.match(str(bruto))
    return int(m.group(1)) if m else 0


def parse_canal(bruto) -> Canal:
    try:
        return Canal(str(bruto).strip())
    except ValueError:
        return Canal.VD


def parse_classe_oper(bruto) -> ClasseOperacao:
    return ClasseOperacao.DEVOLUCAO if bruto == "DV" else ClasseOperacao.VENDA


# ============================================================
# 🧱 Normalizador de linhas
# ============================================================
class RecordNormalizer:
    """
    Converte linhas heterogêneas (dict rótulo → texto) em SaleRecord.
    - Resolve sinônimos de cabeçalho (config/column_aliases.py).
    - Linhas sem data válida são descartadas.
    - CNPJ / pedido vazios recebem identificador sintético por linha.
    """

    def __init__(self, colunas: Optional[Mapping[str, tuple]] = None):
        self.colunas = colunas or COLUNAS

    def _campo(self, linha: Mapping, campo: str) -> str:
        for rotulo in self.colunas.get(campo, ()):
            valor = linha.get(rotulo)
            if valor is None or (isinstance(valor, float) and pd.isna(valor)):
                continue
            texto = str(valor)
            if texto:
                return texto
        return PADROES.get(campo, "")

    def _classe_bruta(self, linha: Mapping) -> str:
        # Só o token exato "DV" (em qualquer um dos rótulos) marca devolução
        for rotulo in self.colunas["classe_oper"]:
            if linha.get(rotulo) == "DV":
                return "DV"
        return ""

    def normalizar_linha(self, linha: Mapping, index: int) -> Optional[SaleRecord]:
        data = parse_data(self._campo(linha, "data"))
        if not data:
            logger.debug(f"🚫 Linha {index} descartada: data ausente ou inválida.")
            return None

        return SaleRecord(
            id=f"ROW-{index}",
            data=data,
            regiao=self._campo(linha, "regiao"),
            divisao=self._campo(linha, "divisao"),
            setor=self._campo(linha, "setor"),
            representante=self._campo(linha, "representante"),
            canal=parse_canal(self._campo(linha, "canal")),
            fornecedor=self._campo(linha, "fornecedor"),
            cnpj=self._campo(linha, "cnpj") or f"UNKNOWN-{index}",
            razao_social=self._campo(linha, "razao_social"),
            cod_produto=self._campo(linha, "cod_produto"),
            descricao_produto=self._campo(linha, "descricao_produto"),
            valor=parse_valor(self._campo(linha, "valor")),
            quantidade=parse_quantidade(self._campo(linha, "quantidade")),
            pedido=self._campo(linha, "pedido") or f"UNK-{index}",
            classe_oper=parse_classe_oper(self._classe_bruta(linha)),
            prazos=self._campo(linha, "prazos"),
            rede=self._campo(linha, "rede"),
            cidade=self._campo(linha, "cidade"),
            uf=self._campo(linha, "uf"),
        )

    def normalizar_linhas(self, linhas: Iterable[Mapping]) -> list[SaleRecord]:
        """Normaliza todas as linhas e devolve os registros ordenados por data."""
        registros = []
        descartadas = 0

        for index, linha in enumerate(linhas):
            try:
                registro = self.normalizar_linha(linha, index)
            except Exception as e:
                logger.warning(f"⚠️ Erro ao interpretar linha {index}: {e}")
                descartadas += 1
                continue

            if registro is None:
                descartadas += 1
                continue
            registros.append(registro)

        registros.sort(key=lambda r: r.data)

        logger.info(f"✅ {len(registros)} registros normalizados / {descartadas} linhas descartadas.")
        return registros

    def normalizar_dataframe(self, df: pd.DataFrame) -> list[SaleRecord]:
        if df is None or df.empty:
            logger.warning("⚠️ DataFrame vazio — nenhum registro a normalizar.")
            return []
        df = df.fillna("")
        return self.normalizar_linhas(df.to_dict(orient="records"))
