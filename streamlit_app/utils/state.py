"""
Session State Management Module.

Wraps Streamlit's session_state so that each browser session owns exactly one
Storefront context (storage, clients, session, premium flag, cart, theme) and
the page flows that must survive reruns.

Keys:
- `storefront`: the Storefront context, started on first access
- `login_flow` / `purchase_flow`: flow state machines
- `weekly_plan`: last generated personalized plan
- `flash`: a Dialog to show once on the next page (set before switch_page)

# NOTE: The cart lives inside the Storefront context, so it lasts only for the
    current Streamlit session. The token and theme are in local storage and
    survive restarts.
"""

from typing import Optional

import streamlit as st

from storefront.context import Storefront
from storefront.flows import Dialog, LoginFlow, PurchaseFlow
from storefront.models import WeeklyPlan

STOREFRONT_KEY = "storefront"
LOGIN_FLOW_KEY = "login_flow"
PURCHASE_FLOW_KEY = "purchase_flow"
WEEKLY_PLAN_KEY = "weekly_plan"
FLASH_KEY = "flash"


def get_storefront() -> Storefront:
    """
    Get the Storefront context of this session, creating and starting it on first use.

    Returns:
        The session's Storefront.
    """
    if STOREFRONT_KEY not in st.session_state:
        store = Storefront()
        store.start()
        st.session_state[STOREFRONT_KEY] = store
    return st.session_state[STOREFRONT_KEY]


def get_login_flow() -> LoginFlow:
    if LOGIN_FLOW_KEY not in st.session_state:
        st.session_state[LOGIN_FLOW_KEY] = LoginFlow(get_storefront().session)
    return st.session_state[LOGIN_FLOW_KEY]


def get_purchase_flow() -> PurchaseFlow:
    if PURCHASE_FLOW_KEY not in st.session_state:
        st.session_state[PURCHASE_FLOW_KEY] = PurchaseFlow(get_storefront().premium)
    return st.session_state[PURCHASE_FLOW_KEY]


def get_weekly_plan() -> Optional[WeeklyPlan]:
    return st.session_state.get(WEEKLY_PLAN_KEY)


def set_weekly_plan(plan: Optional[WeeklyPlan]) -> None:
    st.session_state[WEEKLY_PLAN_KEY] = plan


def set_flash(dialog: Dialog) -> None:
    """Keep a dialog to show on the next page rendered."""
    st.session_state[FLASH_KEY] = dialog


def pop_flash() -> Optional[Dialog]:
    return st.session_state.pop(FLASH_KEY, None)


def logout() -> None:
    """
    End the user session.

    Clears the token, premium flag and cart, and forgets the flows; the theme
    preference is kept.
    """
    get_storefront().logout()
    for key in (LOGIN_FLOW_KEY, PURCHASE_FLOW_KEY, WEEKLY_PLAN_KEY):
        st.session_state.pop(key, None)
