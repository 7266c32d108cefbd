# warrant_calc/constants.py
"""
Constantes du calculateur de warrants.
- Couleurs des graphiques
- Libellés d'UI (titre)
- Taux sans risque par défaut
- Paramètres du solveur de volatilité implicite
- Valeurs par défaut du formulaire
"""

# Orange
ORANGE = "#FFA500"

# Courbes : cours de l'action (bleu) et valeur de l'investissement (orange)
STOCK_MAIN_COLOR = "#2563eb"
STOCK_RANGE_COLOR = "#93c5fd"
INVESTMENT_MAIN_COLOR = "#ea580c"
INVESTMENT_RANGE_COLOR = "#fdba74"

# Titre affiché en tête de page
APP_TITLE = "Warrant Calculator"

# Taux sans risque approximatifs (BCE / Fed)
DEFAULT_RISK_FREE_RATES = {
    "EUR": 0.04,
    "USD": 0.05,
}

# Taux utilisé par la projection des scénarios
SCENARIO_RISK_FREE_RATE = 0.01

# Horizon du premier segment de scénario (mois)
NEAR_TERM_MONTHS = 24

# Échéance par défaut du formulaire : aujourd'hui + N ans
DEFAULT_HORIZON_YEARS = 2

# Temps résiduel minimal (années) dans les séries temporelles
TIME_EPSILON = 0.0001

# Newton-Raphson
IV_INITIAL_GUESS = 0.2
IV_TOLERANCE = 1e-5
IV_MAX_ITERATIONS = 100
IV_MIN_VOLATILITY = 0.001
MIN_VEGA = 1e-10
VEGA_SIGMA_FLOOR = 1e-10

# Scénarios
SCENARIO_NAMES = ["Expected", "Worst Case", "Best Case"]

# Formulaire
DEFAULT_INPUTS = {
    "investment": 2000.0,
    "strike_price": 460.0,
    "warrant_price": 8.145,
    "volatility": 0.3,
    "current_stock_price": 200.0,
    "exchange_rate": 1.0,
    "risk_free_rate": SCENARIO_RISK_FREE_RATE,
    "volatility_range": 0.2,
}

# (near-term, far-term) par scénario
DEFAULT_TARGETS = {
    "Expected": (300.0, 400.0),
    "Worst Case": (150.0, 200.0),
    "Best Case": (450.0, 600.0),
}
