import streamlit as st

from src.library.controller import DocumentLibrary
from src.library.models import LANGUAGES, User

_LANGUAGE_LABELS = {
    "es": "🇪🇸 ESP",
    "fr": "🇫🇷 FRA",
    "ar": "🇲🇦 DAR",
    "wo": "🇸🇳 WOL",
}


def render_sidebar(library: DocumentLibrary, actor: User):
    with st.sidebar:
        st.markdown(
            "<div style=\"color: var(--primary-accent); font-size: 1.2rem; font-weight: bold; margin-bottom: 5px;\">INDUSDOCS</div>",  # noqa: E501
            unsafe_allow_html=True,
        )
        st.markdown(f"**{actor.name}**")
        st.caption(f"{actor.role} · {library.site_name(actor.site_affinity, 'Global')}")

        st.page_link("pages/1_Documents.py", label="Documents", icon="📄")
        if actor.is_admin:
            st.page_link("pages/2_Administration.py", label="Administration", icon="🏭")

        st.markdown("---")

        language = st.selectbox(
            "Language",
            LANGUAGES,
            index=LANGUAGES.index(library.state.language),
            format_func=lambda code: _LANGUAGE_LABELS[code],
        )
        if language != library.state.language:
            library.set_language(language)
            st.rerun()

        st.markdown("---")

        if st.button("LOGOUT", use_container_width=True):
            library.logout()
            for key in list(st.session_state.keys()):
                del st.session_state[key]
            st.switch_page("app.py")
