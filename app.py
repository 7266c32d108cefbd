import logging
import importlib

import streamlit as st
from streamlit_option_menu import option_menu

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="Warrant Calculator", layout="wide", page_icon="📈")

# --- Style global ---
st.markdown("""
    <style>
        .block-container { padding: 2rem; border-radius: 10px; }
        .stDataFrame, .stButton>button { border-radius: 8px; }
    </style>
""", unsafe_allow_html=True)

# --- Menu latéral ---
with st.sidebar:
    selected_section = option_menu(
        menu_title=None,
        options=["Calculator", "Implied Volatility"],
        icons=["graph-up", "sliders"],
        menu_icon=None,
        default_index=0,
        styles={
            "container": {"padding": "0!important"},
            "nav-link": {"font-size": "18px", "text-align": "left", "margin": "5px 0"},
            "nav-link-selected": {"background-color": "var(--primary-color)", "color": "white"},
        },
    )

# --- Routing vers les pages ---
pages = {
    "Calculator": "modules.calculator",
    "Implied Volatility": "modules.implied_vol",
}

if selected_section in pages:
    module = importlib.import_module(pages[selected_section])
    module.main()
