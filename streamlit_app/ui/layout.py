"""
Layout primitives for consistent page structure.

Provides reusable components for page headers, sections, cards, and KPI rows.
"""

from contextlib import contextmanager
from typing import Optional

import streamlit as st


def page_header(title: str, subtitle: Optional[str] = None) -> None:
    """
    Render a consistent page header with title and optional subtitle.

    Args:
        title: Main page title
        subtitle: Optional subtitle/description text
    """
    st.markdown('<div class="mps-page-header">', unsafe_allow_html=True)
    st.markdown(f"# {title}")
    if subtitle:
        st.markdown(f'<div class="subtitle">{subtitle}</div>', unsafe_allow_html=True)
    st.markdown('</div>', unsafe_allow_html=True)


def kpi_row(kpis: list[dict]) -> None:
    """
    Render a row of KPI metrics.

    Args:
        kpis: List of dicts with keys:
            - label: KPI label text
            - value: KPI value (number or string)
            - icon: Optional emoji or icon prefix
    """
    cols = st.columns(len(kpis))
    for col, kpi in zip(cols, kpis):
        with col:
            icon = kpi.get("icon", "")
            label = kpi.get("label", "")
            st.metric(label=f"{icon} {label}" if icon else label, value=kpi.get("value", ""))


def section(title: str, caption: Optional[str] = None) -> None:
    st.markdown(f"## {title}")
    if caption:
        st.markdown(f'<div class="mps-section-caption">{caption}</div>', unsafe_allow_html=True)


@contextmanager
def card(title: Optional[str] = None):
    """
    Context manager for a card container.

    Usage:
        with card("Card Title"):
            st.write("Card content")
    """
    st.markdown('<div class="mps-card">', unsafe_allow_html=True)
    if title:
        st.markdown(f"### {title}")
    yield
    st.markdown('</div>', unsafe_allow_html=True)


def price_tag(amount) -> str:
    """Format an amount in euros with two decimals."""
    return f"€{amount:.2f}"
