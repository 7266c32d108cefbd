import datetime as dt

import streamlit as st

from warrant_calc.constants import ORANGE, APP_TITLE, DEFAULT_INPUTS, DEFAULT_TARGETS, SCENARIO_NAMES
from warrant_calc.types import ScenarioTargets, WarrantPosition
from warrant_calc.validation import validate_inputs
from warrant_calc.scenarios import (
    build_scenarios, default_end_date, months_between, project_scenarios, solve_entry_volatility,
)
from warrant_calc.tables import table_results, table_summary, table_position
from warrant_calc.plots import fig_stock_price, fig_investment_value, fig_scenarios_comparison


def _styles():
    st.markdown(
        f"""
        <style>
          .title {{
            font-size: 40px;
            font-weight: bold;
            text-align: center;
            color: {ORANGE};
            margin-top: 20px;
            margin-bottom: 20px;
          }}
          .thin-hr {{
            border: 0; border-top: 2px solid {ORANGE};
            margin: 10px 0 14px 0;
          }}
          .red-btn button {{
            background-color:#DC2626 !important; color:white !important;
            padding: 10px 14px !important; border:none; border-radius:8px;
          }}
          .center-title {{
            text-align: center !important;
            display: block;
            width: 100%;
          }}
        </style>
        <div class="title">{APP_TITLE}</div>
        <hr class="thin-hr"/>
        """,
        unsafe_allow_html=True,
    )


def render():
    _styles()

    # ====== Inputs Position / Market / Scenarios ======
    c1, c2, c3 = st.columns(3, gap="large")

    with c1:
        st.markdown("<h3 class='center-title'>Position</h3>", unsafe_allow_html=True)
        investment = st.number_input("Initial investment (€)", min_value=0.0, value=DEFAULT_INPUTS["investment"], step=100.0)
        warrant_price = st.number_input("Initial warrant price (€)", min_value=0.0, value=DEFAULT_INPUTS["warrant_price"], step=0.01, format="%.4f")
        strike_price = st.number_input("Strike price ($)", min_value=0.0, value=DEFAULT_INPUTS["strike_price"], step=1.0)
        end_date = st.date_input("End date of warrant", value=default_end_date())

    with c2:
        st.markdown("<h3 class='center-title'>Market</h3>", unsafe_allow_html=True)
        current_price = st.number_input("Current stock price ($)", min_value=0.0, value=DEFAULT_INPUTS["current_stock_price"], step=1.0)
        exchange_rate = st.number_input("Exchange rate (EUR per USD)", min_value=0.0, value=DEFAULT_INPUTS["exchange_rate"], step=0.0001, format="%.4f")
        interest_rate = st.number_input("Risk-free rate (%)", value=DEFAULT_INPUTS["risk_free_rate"] * 100.0, step=0.05, format="%.2f")
        solve_vol = st.radio("Volatility", ["Manual", "Implied from warrant price"], horizontal=True)
        volatility = st.number_input("Implied volatility (%)", value=DEFAULT_INPUTS["volatility"] * 100.0, step=0.25, format="%.2f",
                                     disabled=(solve_vol != "Manual"))
        volatility_range = st.number_input("Uncertainty range (%)", min_value=0.0, max_value=100.0,
                                           value=DEFAULT_INPUTS["volatility_range"] * 100.0, step=1.0, format="%.1f")

    with c3:
        st.markdown("<h3 class='center-title'>Scenarios</h3>", unsafe_allow_html=True)
        targets = []
        for name in SCENARIO_NAMES:
            near_default, far_default = DEFAULT_TARGETS[name]
            a, b = st.columns(2)
            with a:
                near = st.number_input(f"{name} – 24 months ($)", min_value=0.0, value=near_default, step=1.0)
            with b:
                far = st.number_input(f"{name} – expiry ($)", min_value=0.0, value=far_default, step=1.0)
            targets.append(ScenarioTargets(name=name, near_term_price=float(near), far_term_price=float(far)))

    today = dt.date.today()
    total_months = months_between(today, end_date)
    rate = float(interest_rate) / 100.0

    # ====== Volatilité implicite ======
    sigma = float(volatility) / 100.0
    if solve_vol != "Manual" and total_months > 0 and current_price > 0 and strike_price > 0:
        iv = solve_entry_volatility(
            float(warrant_price), float(current_price), float(strike_price),
            rate, float(exchange_rate), total_months,
        )
        sigma = iv.volatility
        if not iv.converged:
            st.warning(f"Implied volatility did not converge ({iv.status}), using {sigma * 100:.2f} %")

    position = WarrantPosition(
        investment=float(investment),
        initial_warrant_price=float(warrant_price),
        implied_volatility=sigma,
        strike=float(strike_price),
        risk_free_rate=rate,
        exchange_rate=float(exchange_rate),
    )
    band = float(volatility_range) / 100.0

    # ====== Validation ======
    errors = validate_inputs(position, float(current_price), targets, total_months, band)
    if errors:
        for e in errors:
            st.error(e)
        st.stop()

    # ====== Bouton Calculate ======
    c_btn_left, c_btn_mid, c_btn_right = st.columns([2, 1, 2])
    with c_btn_mid:
        st.markdown('<div class="red-btn">', unsafe_allow_html=True)
        calc_btn = st.button("Calculate", key="calculate_button", use_container_width=True)
        st.markdown('</div>', unsafe_allow_html=True)

    if calc_btn:
        scenarios = build_scenarios(float(current_price), targets, total_months, band)
        st.session_state["rows"] = project_scenarios(scenarios, position, total_months)
        st.session_state["position"] = position

    st.markdown('<hr class="thin-hr"/>', unsafe_allow_html=True)

    if "rows" not in st.session_state:
        return

    rows = st.session_state["rows"]

    # ====== Résultats ======
    r1, r2 = st.columns(2, gap="large")
    with r1:
        st.markdown("<h3 class='center-title'>Summary</h3>", unsafe_allow_html=True)
        st.dataframe(table_summary(rows), hide_index=True, use_container_width=True)
    with r2:
        st.markdown("<h3 class='center-title'>Position</h3>", unsafe_allow_html=True)
        st.dataframe(table_position(st.session_state["position"]), hide_index=True, use_container_width=True)

    st.plotly_chart(fig_scenarios_comparison(rows, today), use_container_width=True, config={"displaylogo": False})

    tabs = st.tabs(SCENARIO_NAMES)
    for tab, name in zip(tabs, SCENARIO_NAMES):
        with tab:
            g1, g2 = st.columns(2, gap="large")
            with g1:
                st.plotly_chart(fig_stock_price(rows, name, today), use_container_width=True, config={"displaylogo": False})
            with g2:
                st.plotly_chart(fig_investment_value(rows, name, today), use_container_width=True, config={"displaylogo": False})
            st.dataframe(table_results(rows, name, today), hide_index=True, use_container_width=True)


# === Point d'entrée ===
def main():
    render()


if __name__ == "__main__":
    main()
