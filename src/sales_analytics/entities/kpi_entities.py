# ============================================================
# 📦 src/sales_analytics/entities/kpi_entities.py
# ============================================================

from dataclasses import dataclass, asdict, fields


# ============================================================
# 📊 Bateria de KPIs
# ============================================================
@dataclass(frozen=True)
class KPIStats:
    faturamento: float = 0.0
    positivacao: float = 0.0
    pedidos: float = 0.0
    ticket_medio: float = 0.0
    sku_por_pdv: float = 0.0
    parcela_media: float = 0.0
    prazo_medio: float = 0.0

    @classmethod
    def vazio(cls) -> "KPIStats":
        return cls()

    @classmethod
    def metricas(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def valor(self, metrica: str) -> float:
        if metrica not in self.metricas():
            raise KeyError(f"Métrica desconhecida: {metrica}")
        return getattr(self, metrica)

    def as_dict(self) -> dict:
        return asdict(self)


# Métricas somáveis entre linhas; as demais são razões e entram como média
METRICAS_ADITIVAS = ("faturamento", "positivacao", "pedidos")
METRICAS_RAZAO = ("ticket_medio", "sku_por_pdv", "prazo_medio", "parcela_media")


# ============================================================
# 🏢 Projeções por entidade
# ============================================================
@dataclass(frozen=True)
class EntityStats:
    """Mês atual vs. média da janela de comparação para um cliente/rede/fornecedor/representante."""
    id: str
    nome: str
    faturamento_atual: float
    media_historica: float
    tendencia: float
    positivacao: float
    pedidos: float
    ticket_medio: float
    sku_por_pdv: float
    parcela_media: float
    prazo_medio: float
    regiao: str = ""
    setor: str = ""

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SupplierStats(EntityStats):
    qtd_skus: int = 0


@dataclass(frozen=True)
class ProductStats:
    codigo: str
    descricao: str
    faturamento: float
    quantidade: int
    fornecedor: str
    divisao: str
    qtd_clientes: int
    qtd_pedidos: int

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class GeoStats:
    cidade: str
    uf: str
    lat: float
    lon: float
    faturamento: float
    positivacao: int

    def as_dict(self) -> dict:
        return asdict(self)


# ============================================================
# 📈 Evolução mensal e destaques
# ============================================================
@dataclass(frozen=True)
class MonthlyMetric:
    nome: str        # "Ago", "Set"...
    chave_mes: str   # "2025-08"
    faturamento: float
    positivacao: float
    ticket_medio: float
    sku_por_pdv: float


@dataclass(frozen=True)
class TopItem:
    id: str
    nome: str
    valor: float
    sub_valor: float
