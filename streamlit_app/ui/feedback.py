"""
Standardized feedback utilities for errors, empty states, dialogs and loading.

Flows report back a Dialog; show_dialog() renders it inline, since the pages
re-run top to bottom and a dialog only has to survive until the next action.
"""

from contextlib import contextmanager
from typing import Dict, List, Optional

import streamlit as st

from storefront.flows import Dialog


def show_error(message: str, hint: Optional[str] = None) -> None:
    """
    Display a standardized error message with optional hint.

    Args:
        message: Main error message to display
        hint: Optional hint text to help users resolve the issue
    """
    st.error(f"⚠️ {message}")
    if hint:
        st.caption(f"💡 {hint}")


def show_field_errors(field_errors: Dict[str, List[str]]) -> None:
    for field, messages in field_errors.items():
        label = field.replace("_", " ").capitalize()
        for message in messages:
            st.warning(f"{label}: {message}")


def show_empty_state(
    title: str,
    subtitle: Optional[str] = None,
    action_label: str = "Get started",
    action_page_path: Optional[str] = None
) -> None:
    """
    Display a standardized empty state with optional action button.

    Args:
        title: Main empty state title
        subtitle: Optional subtitle/description text
        action_label: Label for the action button
        action_page_path: Optional page file to navigate to when the button is clicked
    """
    st.info(f"📭 **{title}**")
    if subtitle:
        st.caption(subtitle)

    if action_page_path:
        if st.button(action_label, use_container_width=True, type="primary"):
            st.switch_page(action_page_path)


def show_dialog(dialog: Dialog, key: str) -> bool:
    """
    Render a flow dialog.

    Args:
        dialog: Dialog returned by a flow
        key: Widget key prefix for the confirm button

    Returns:
        True when a "question" dialog was confirmed.
    """
    if dialog.kind == "success":
        st.success(f"**{dialog.title}**  \n{dialog.text}")
        return False
    if dialog.kind == "error":
        st.error(f"**{dialog.title}**  \n{dialog.text}")
        return False

    st.warning(f"**{dialog.title}**  \n{dialog.text}")
    return st.button(dialog.confirm_label or "OK", key=f"{key}_confirm", type="primary")


@contextmanager
def working_spinner(label: str = "Working…"):
    """
    Context manager wrapper for standardized loading spinners.

    Usage:
        with working_spinner("Loading menu…"):
            sections = load_menu_sections(catalog)
    """
    with st.spinner(label):
        yield
