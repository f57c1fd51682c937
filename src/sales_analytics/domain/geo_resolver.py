# ============================================================
# 📦 src/sales_analytics/domain/geo_resolver.py
# ============================================================

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

import pandas as pd
from loguru import logger

from sales_analytics.config.settings import GAZETTEER_PADRAO
from sales_analytics.domain.utils_texto import normalizar_cidade, normalizar_uf
from sales_analytics.entities.kpi_entities import GeoStats
from sales_analytics.entities.sale_record import SaleRecord


@dataclass(frozen=True)
class Localizacao:
    cidade: str
    uf: str
    lat: float
    lon: float


# ============================================================
# 🗺️ Gazetteer imutável (cidade+UF → coordenadas)
# ============================================================
class Gazetteer:
    """
    Tabela de coordenadas construída uma única vez e compartilhada por referência.
    Não há operação de escrita depois da construção.
    """

    def __init__(self, entradas: Iterable[Localizacao]):
        por_chave: dict[tuple[str, str], Localizacao] = {}
        primeira_por_cidade: dict[str, Localizacao] = {}

        for loc in entradas:
            chave = (normalizar_cidade(loc.cidade), normalizar_uf(loc.uf))
            loc = Localizacao(cidade=chave[0], uf=chave[1], lat=loc.lat, lon=loc.lon)
            por_chave.setdefault(chave, loc)
            # Sem UF informada: vale a primeira cidade homônima na ordem do arquivo
            primeira_por_cidade.setdefault(chave[0], loc)

        self._por_chave = MappingProxyType(por_chave)
        self._primeira_por_cidade = MappingProxyType(primeira_por_cidade)

    def __len__(self) -> int:
        return len(self._por_chave)

    def resolver(self, cidade: Optional[str], uf: Optional[str] = None) -> Optional[Localizacao]:
        cidade_limpa = normalizar_cidade(cidade or "")
        if not cidade_limpa:
            return None

        uf_limpa = normalizar_uf(uf or "")
        if uf_limpa:
            return self._por_chave.get((cidade_limpa, uf_limpa))
        return self._primeira_por_cidade.get(cidade_limpa)

    def coordenadas(self, cidade: Optional[str], uf: Optional[str] = None) -> Optional[tuple[float, float]]:
        loc = self.resolver(cidade, uf)
        return (loc.lat, loc.lon) if loc else None


def carregar_gazetteer(path: Union[str, Path, None] = None) -> Gazetteer:
    """Lê o CSV `uf,cidade,lat,lon` (padrão: arquivo empacotado em config/data)."""
    path = Path(path or GAZETTEER_PADRAO)
    if not path.exists():
        raise FileNotFoundError(f"❌ Gazetteer não encontrado: {path}")

    df = pd.read_csv(path, dtype={"uf": str, "cidade": str}, keep_default_na=False)
    faltando = {"uf", "cidade", "lat", "lon"} - set(df.columns)
    if faltando:
        raise ValueError(f"❌ Gazetteer sem colunas obrigatórias: {sorted(faltando)}")

    gazetteer = Gazetteer(
        Localizacao(cidade=row.cidade, uf=row.uf, lat=float(row.lat), lon=float(row.lon))
        for row in df.itertuples(index=False)
    )
    logger.info(f"🗺️ Gazetteer carregado: {len(gazetteer)} cidades ({path.name}).")
    return gazetteer


def gazetteer_de_mapa(mapa: Mapping[tuple[str, str], tuple[float, float]]) -> Gazetteer:
    return Gazetteer(
        Localizacao(cidade=c, uf=u, lat=lat, lon=lon) for (c, u), (lat, lon) in mapa.items()
    )


# ============================================================
# 📍 Faturamento por cidade
# ============================================================
def estatisticas_geo(registros: Iterable[SaleRecord], gazetteer: Gazetteer) -> list[GeoStats]:
    """
    Soma faturamento e conta linhas com valor > 0 por cidade resolvida.
    Cidades não encontradas no gazetteer ficam de fora (sem erro).
    """
    acumulado: dict[tuple[str, str], dict] = {}
    nao_resolvidas = 0

    for r in registros:
        if not r.cidade:
            continue

        loc = gazetteer.resolver(r.cidade, r.uf)
        if loc is None:
            nao_resolvidas += 1
            continue

        chave = (loc.cidade, loc.uf)
        item = acumulado.get(chave)
        if item is None:
            item = acumulado[chave] = {"loc": loc, "faturamento": 0.0, "positivacao": 0}

        item["faturamento"] += r.valor
        if r.valor > 0:
            item["positivacao"] += 1

    if nao_resolvidas:
        logger.debug(f"📍 {nao_resolvidas} linha(s) com cidade não localizada no gazetteer.")

    resultado = [
        GeoStats(
            cidade=i["loc"].cidade,
            uf=i["loc"].uf,
            lat=i["loc"].lat,
            lon=i["loc"].lon,
            faturamento=i["faturamento"],
            positivacao=i["positivacao"],
        )
        for i in acumulado.values()
    ]
    return sorted(resultado, key=lambda g: g.faturamento, reverse=True)
