#sales_analytics/src/sales_analytics/domain/utils_texto.py

import re
import unicodedata


def remover_acentos(s: str) -> str:
    return (
        unicodedata.normalize("NFKD", s)
        .encode("ascii", "ignore")
        .decode("ascii")
    )


def normalizar_cidade(cidade: str) -> str:
    """
    Chave canônica de cidade para o gazetteer.
    - caixa alta, sem acentos
    - remove sufixo de UF embutido ("CURITIBA - PR", "CURITIBA/PR")
    """
    if not cidade:
        return ""

    s = remover_acentos(cidade.strip().upper())
    s = re.sub(r"[-/].*$", "", s)
    s = re.sub(r"\s{2,}", " ", s)
    return s.strip()


def normalizar_uf(uf: str) -> str:
    if not uf:
        return ""
    return uf.strip().upper()
