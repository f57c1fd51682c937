# ============================================================
# 🏷️ Sinônimos de cabeçalho das planilhas exportadas do ERP
# ============================================================
# Ordem importa: o primeiro rótulo com valor não vazio vence.

COLUNAS = {
    "setor": ("Setor",),
    "regiao": ("Região", "Regiao"),
    "divisao": ("Divisão", "Divisao"),
    "canal": ("Canal",),
    "valor": ("SOMA Valor", "Valor", "Faturamento"),
    "quantidade": ("SOMA Quantidade", "Quantidade"),
    "data": ("Data NFE", "Data"),
    "cnpj": ("CNPJ", "Cliente"),
    "razao_social": ("Razão Social", "Razao Social", "Nome"),
    "cod_produto": ("Cód. Produto", "Cod. Produto", "Produto"),
    "descricao_produto": ("Descrição", "Descricao"),
    "pedido": ("Num. Pedido", "Pedido"),
    "classe_oper": ("Classe Oper.", "Classe Oper"),
    "prazos": ("Prazos", "Cond. Pagto"),
    "rede": ("Nome Rede A", "Nome Rede R/I", "Rede"),
    "fornecedor": ("Fornecedor",),
    "representante": ("Representante da venda", "Representante"),
    "cidade": ("Cidade", "Município", "Municipio", "City"),
    "uf": ("UF", "Estado", "State"),
}

PADROES = {
    "setor": "N/A",
    "regiao": "N/A",
    "divisao": "N/A",
    "canal": "N/A",
    "valor": "0",
    "quantidade": "0",
    "data": "",
    "razao_social": "Cliente Desconhecido",
    "cod_produto": "N/A",
    "descricao_produto": "Produto Desconhecido",
    "classe_oper": "",
    "prazos": "",
    "rede": "Independente",
    "fornecedor": "N/A",
    "representante": "N/A",
    "cidade": "",
    "uf": "",
}
