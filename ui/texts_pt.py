APP_TITLE = "Calculadora de Custo de Impressão 3D"

# Page titles
PAGE_SETTINGS = "Configurações Padrão"
PAGE_INPUT = "Dados da Impressão"
PAGE_RESULTS_COST = "Custo de Produção"
PAGE_RESULTS_PRICE = "Preço de Venda"

# Buttons
BTN_RESET = "Redefinir"
BTN_NEXT = "Próximo: Dados da Impressão"
BTN_BACK = "Voltar"
BTN_CALCULATE = "Calcular Custo"
BTN_EXPORT = "Exportar Detalhes"
BTN_NEW_CALCULATION = "Fazer Novo Cálculo"

# Settings labels
LBL_MATERIAL_COST = "Custo do Material (R$/kg)"
LBL_HOURLY_RATE = "Taxa Horária (R$/h)"
LBL_POWER_COST = "Custo da Energia (R$/kWh)"
LBL_PRINTER_POWER = "Potência da Impressora (W)"
LBL_MARKUP = "Markup (%)"

# Job input labels
LBL_DURATION = "Duração da Impressão (Horas)"
LBL_WEIGHT = "Peso do Filamento (Gramas)"

# Results labels
LBL_TOTAL_COST = "CUSTO TOTAL DE PRODUÇÃO (MATERIAL + ENERGIA + HORA)"
LBL_MATERIAL = "Material"
LBL_ENERGY = "Energia"
LBL_PRINTER_TIME = "Tempo Impressora"
LBL_SELLING_PRICE = "PREÇO DE VENDA SUGERIDO"
LBL_PROFIT = "LUCRO ESTIMADO"

# Guidance
MSG_PRICE_BASIS = "Baseado no Custo Total de {total} e Markup de {markup}%, aqui estão as sugestões:"
MSG_VIEW_ERROR = "Erro ao carregar a visualização."
