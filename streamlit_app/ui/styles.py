"""
Global CSS Styling for the Meal Planner Storefront.

load_global_styles() injects the shared stylesheet on every page. The dark
theme is a class of overrides appended when the user's theme preference is
"dark".
"""

import streamlit as st

BASE_CSS = """
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Nunito:wght@400;600;700&display=swap');

        html, body, [class*="css"] {
            font-family: 'Nunito', 'sans serif' !important;
        }

        h1, h2, h3, h4, h5, h6 {
            font-weight: 600 !important;
            letter-spacing: 0.02em !important;
        }

        .stButton > button {
            border-radius: 50px !important;
            font-weight: 600 !important;
            padding: 0.5rem 1.25rem !important;
        }

        .mps-card {
            border-radius: 12px !important;
            padding: 1rem 1.25rem !important;
            background-color: #ffffff !important;
            border: 1px solid rgba(196, 90, 42, 0.15) !important;
            margin-bottom: 1rem !important;
        }

        .mps-page-header {
            margin-bottom: 1.25rem !important;
        }

        .mps-page-header .subtitle {
            color: #666 !important;
            font-size: 1rem !important;
        }

        .mps-section-caption {
            color: #666 !important;
            font-size: 0.9rem !important;
            margin-bottom: 0.75rem !important;
        }

        .mps-price {
            font-weight: 700;
            color: #C45A2A;
        }

        .mps-premium-badge {
            display: inline-block;
            padding: 0.2rem 0.6rem;
            border-radius: 999px;
            background-color: #C45A2A;
            color: #ffffff;
            font-size: 0.8rem;
        }
    </style>
"""

DARK_CSS = """
    <style>
        .stApp, [data-testid="stSidebar"] {
            background-color: #1e1e1e !important;
            color: #f0f0f0 !important;
        }

        .mps-card {
            background-color: #2a2a2a !important;
            border-color: rgba(255, 255, 255, 0.1) !important;
        }

        .mps-page-header .subtitle, .mps-section-caption {
            color: #bbbbbb !important;
        }
    </style>
"""


def load_global_styles(dark: bool = False) -> None:
    """
    Inject global CSS styles.

    Args:
        dark: Append the dark theme overrides
    """
    st.markdown(BASE_CSS, unsafe_allow_html=True)
    if dark:
        st.markdown(DARK_CSS, unsafe_allow_html=True)
