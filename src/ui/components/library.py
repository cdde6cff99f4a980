import logging

import streamlit as st

from src.config import settings
from src.library.controller import DocumentLibrary, create_library


@st.cache_resource
def get_library() -> DocumentLibrary:
    # Single browser profile: one library instance for the whole Streamlit process
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )
    return create_library()


def require_login(library: DocumentLibrary):
    """Send anonymous visitors back to the login page."""
    if library.actor is None:
        st.switch_page("app.py")
    return library.actor
