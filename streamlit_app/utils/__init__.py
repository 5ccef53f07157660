"""
Utility modules for the Streamlit frontend.

This package contains:
- state: the Storefront context and page flows kept in session state
- navigation: route paths to page files, and the per-page guard
"""
