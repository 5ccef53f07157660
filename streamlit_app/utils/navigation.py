"""
Page navigation and route guards for the Streamlit pages.

Streamlit routes by page file; the storefront routes by path. PAGE_FILES maps
one to the other, and enter_page() runs the route's guards before a page
renders anything else.

Flow: page -> enter_page(path) -> check_route() -> allowed | st.switch_page(redirect)
"""

import logging

import streamlit as st

from storefront.context import Storefront
from storefront.guards import DEFAULT_PATH, ROUTES_BY_PATH, check_route

from ui.feedback import show_dialog
from ui.layout import price_tag
from ui.styles import load_global_styles
from utils.state import get_storefront, logout, pop_flash

logger = logging.getLogger(__name__)

PAGE_FILES = {
    "/register": "pages/01_📝_Register.py",
    "/login": "pages/02_🔑_Login.py",
    "/home": "pages/03_🏠_Home.py",
    "/menu": "pages/04_🍽_Menu.py",
    "/cart": "pages/05_🧺_Cart.py",
    "/premium/plans": "pages/06_💎_Plans.py",
    "/premium/features": "pages/07_⭐_Premium_Features.py",
    "/premium/personalized-plan": "pages/08_🗓_Personalized_Plan.py",
    "/profile": "pages/09_👤_Profile.py",
    "/settings": "pages/10_⚙_Settings.py",
    "/contact": "pages/11_✉_Contact.py",
}


def page_file(path: str) -> str:
    """Page file for a route path; unknown paths map to the default page."""
    return PAGE_FILES.get(path, PAGE_FILES[DEFAULT_PATH])


def go_to(path: str) -> None:
    st.switch_page(page_file(path))


def enter_page(path: str) -> Storefront:
    """
    Prepare a page: styles, guards, sidebar and any pending flash dialog.

    Must be called at the top of every page. Redirects (and stops the
    script) when a guard denies entry.

    Args:
        path: Route path of the page being rendered

    Returns:
        The session's Storefront.
    """
    store = get_storefront()
    load_global_styles(dark=store.theme.is_dark)

    decision = check_route(path, store.session, store.premium)
    if not decision.allowed:
        logger.debug("Redirecting %s -> %s", path, decision.redirect_to)
        go_to(decision.redirect_to)
        st.stop()

    render_sidebar(store, ROUTES_BY_PATH[path].title)

    flash = pop_flash()
    if flash is not None:
        show_dialog(flash, key=f"flash_{path}")
    return store


def render_sidebar(store: Storefront, current_title: str) -> None:
    """
    Sidebar shared by every page: cart summary, premium badge, theme toggle
    and logout.
    """
    with st.sidebar:
        st.markdown("### 🥗 **Meal Planner**")
        st.caption(current_title)
        st.divider()

        if not store.session.is_authenticated():
            if st.button("Contact", use_container_width=True, key="sidebar_contact"):
                go_to("/contact")
        else:
            if store.premium.is_premium:
                st.markdown('<span class="mps-premium-badge">Premium</span>', unsafe_allow_html=True)

            if store.cart.is_empty():
                st.caption("Cart is empty")
            else:
                st.markdown(f"**Cart:** {store.cart.count()} items")
                st.markdown(f"**Total:** {price_tag(store.cart.total())}")
            if st.button("Open Cart", use_container_width=True, key="sidebar_cart"):
                go_to("/cart")

            st.divider()
            if st.button("Log out", use_container_width=True, key="sidebar_logout"):
                logout()
                go_to("/login")

        st.divider()
        label = "☀️ Light mode" if store.theme.is_dark else "🌙 Dark mode"
        if st.button(label, use_container_width=True, key="sidebar_theme"):
            store.theme.toggle()
            st.rerun()
