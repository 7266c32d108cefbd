import streamlit as st

from warrant_calc.constants import ORANGE, DEFAULT_INPUTS
from warrant_calc.validation import validate_iv_inputs
from warrant_calc.pricing import solve_implied_volatility, black_scholes_call_price, calculate_vega
from warrant_calc.tables import table_implied_vol


def render():
    st.markdown(
        f"""
        <div style='font-size:32px; font-weight:bold; text-align:center; color:{ORANGE}; margin:20px 0;'>
          Implied Volatility
        </div>
        """,
        unsafe_allow_html=True,
    )

    c1, c2, c3 = st.columns(3, gap="large")
    with c1:
        market_price = st.number_input("Market warrant price (€)", min_value=0.0, value=DEFAULT_INPUTS["warrant_price"], step=0.01, format="%.4f")
        exchange_rate = st.number_input("Exchange rate (EUR per USD)", min_value=0.0, value=DEFAULT_INPUTS["exchange_rate"], step=0.0001, format="%.4f")
    with c2:
        stock_price = st.number_input("Stock price ($)", min_value=0.0, value=DEFAULT_INPUTS["current_stock_price"], step=1.0)
        strike = st.number_input("Strike price ($)", min_value=0.0, value=DEFAULT_INPUTS["strike_price"], step=1.0)
    with c3:
        maturity = st.number_input("Time to expiry (years)", min_value=0.0, value=2.0, step=0.25, format="%.2f")
        interest_rate = st.number_input("Risk-free rate (%)", value=DEFAULT_INPUTS["risk_free_rate"] * 100.0, step=0.05, format="%.2f")

    rate = float(interest_rate) / 100.0
    errors = validate_iv_inputs(float(market_price), float(stock_price), float(strike), float(maturity), rate, float(exchange_rate))
    if errors:
        for e in errors:
            st.error(e)
        st.stop()

    res = solve_implied_volatility(float(market_price), float(stock_price), float(strike), float(maturity), rate, float(exchange_rate))
    model_price = black_scholes_call_price(float(stock_price), float(strike), float(maturity), rate, res.volatility) * float(exchange_rate)
    vega = calculate_vega(float(stock_price), float(strike), float(maturity), rate, res.volatility) * float(exchange_rate)

    r1, r2 = st.columns(2, gap="large")
    with r1:
        st.dataframe(table_implied_vol(res), hide_index=True, use_container_width=True)
    with r2:
        st.metric("Model price (€)", f"{model_price:.4f}", delta=f"{model_price - float(market_price):+.6f}")
        st.metric("Vega (€ per 1.00 vol)", f"{vega:.4f}")

    if not res.converged:
        st.warning("Solver stopped before matching the market price; the volatility shown is a best effort.")


def main():
    render()
