"""
Meal Planner Storefront - Streamlit Frontend Main Entry Point.

Sets up page configuration and logging, then sends the visitor to the default
route: the register page, whose guest-only guard forwards users who already
hold a session to /home.

Note: Multi-page routing is handled automatically by Streamlit via the `pages/` folder.
Route paths are mapped to page files in utils/navigation.py.
"""

import sys
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path
# This allows imports to work regardless of how the app is run
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so we can import the storefront package
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
from storefront.config import configure_logging

import streamlit as st

from storefront.guards import DEFAULT_PATH
from utils.navigation import go_to

configure_logging()

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="Meal Planner",
    page_icon="🥗",
    layout="wide",
    initial_sidebar_state="expanded"
)

go_to(DEFAULT_PATH)
