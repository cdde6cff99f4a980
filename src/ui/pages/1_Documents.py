import sys
from pathlib import Path

# Ensure src is in python path
src_path = Path(__file__).parent.parent.parent.resolve()
if str(src_path) not in sys.path:
    sys.path.append(str(src_path))

import streamlit as st  # noqa: E402
from pydantic import ValidationError  # noqa: E402

from src.library.filters import DocumentFilter  # noqa: E402
from src.library.models import ALL, DOC_TYPES, DocumentDraft, doc_type_label  # noqa: E402
from src.ui.components.chat_widget import render_chat_widget  # noqa: E402
from src.ui.components.document_card import render_document_card  # noqa: E402
from src.ui.components.library import get_library, require_login  # noqa: E402
from src.ui.components.sidebar import render_sidebar  # noqa: E402
from src.ui.styles.theme import ai_banner_html, apply_theme, render_footer  # noqa: E402

try:
    st.set_page_config(page_title="IndusDocs | Documents", page_icon="📄", layout="wide")
except Exception:
    pass

apply_theme()

library = get_library()
actor = require_login(library)

render_sidebar(library, actor)


def render_document_form():
    editing_id = st.session_state.get("editing_doc_id")
    editing = next((d for d in library.state.documents if d.id == editing_id), None)
    sites = library.state.sites

    with st.form("document_form"):
        st.subheader("Edit document" if editing else "New document")
        title = st.text_input("Title", value=editing.title if editing else "")
        doc_type = st.selectbox(
            "Type",
            DOC_TYPES,
            index=DOC_TYPES.index(editing.doc_type) if editing else 0,
            format_func=doc_type_label,
        )
        site_ids = [s.id for s in sites]
        site_id = st.selectbox(
            "Site",
            site_ids,
            index=site_ids.index(editing.site_id) if editing and editing.site_id in site_ids else 0,
            format_func=library.site_name,
        )
        category = st.text_input("Category", value=editing.category if editing else "")
        external_url = st.text_input("Document URL", value=editing.external_url if editing else "")
        description = st.text_area("Description", value=editing.description if editing else "")

        save_col, cancel_col = st.columns(2)
        save = save_col.form_submit_button("Save", use_container_width=True)
        cancel = cancel_col.form_submit_button("Cancel", use_container_width=True)

    if cancel:
        st.session_state["doc_form_open"] = False
        st.session_state["editing_doc_id"] = None
        st.rerun()

    if save:
        if not (title and category and external_url and site_id):
            st.error("Title, category, URL and site are required.")
            return
        draft = DocumentDraft(
            title=title,
            doc_type=doc_type,
            category=category,
            external_url=external_url,
            description=description,
            site_id=site_id,
        )
        try:
            library.save_document(draft, editing_id=editing.id if editing else None)
        except ValidationError as e:
            st.error(f"⚠️ Document could not be saved. ({e.error_count()} invalid field(s))")
            return
        st.session_state["doc_form_open"] = False
        st.session_state["editing_doc_id"] = None
        st.rerun()


# Header
header_col, action_col = st.columns([4, 1])
with header_col:
    st.markdown("## Documents")
    if actor.is_admin:
        st.caption("Global administration")
    else:
        st.caption(f"Site: {library.site_name(actor.site_affinity)}")
with action_col:
    if actor.is_admin and st.button("+ Add document", use_container_width=True):
        st.session_state["editing_doc_id"] = None
        st.session_state["doc_form_open"] = True

if actor.is_admin and st.session_state.get("doc_form_open"):
    render_document_form()

# Filters
if actor.is_admin:
    search_col, site_col, ai_col = st.columns([4, 2, 1])
else:
    search_col, ai_col = st.columns([5, 1])
    site_col = None

with search_col:
    query = st.text_input("Search", placeholder="Search documents...", label_visibility="collapsed")

# OPERARIO users are pinned to their own site
site_id = ALL
if site_col is not None:
    with site_col:
        site_id = st.selectbox(
            "Site",
            [ALL, *(s.id for s in library.state.sites)],
            format_func=lambda v: "All sites" if v == ALL else library.site_name(v),
            label_visibility="collapsed",
        )

doc_type = st.radio(
    "Type",
    [ALL, *DOC_TYPES],
    format_func=lambda v: "All" if v == ALL else doc_type_label(v),
    horizontal=True,
    label_visibility="collapsed",
)

selection = DocumentFilter(query=query, doc_type=doc_type, site_id=site_id)

with ai_col:
    if st.button("Analyze with AI", use_container_width=True, disabled=not query):
        with st.spinner("Analyzing..."):
            st.session_state["ai_suggestion"] = library.ai_search(selection)

suggestion = st.session_state.get("ai_suggestion")
if suggestion:
    st.markdown(ai_banner_html(suggestion), unsafe_allow_html=True)
    if st.button("Dismiss", key="dismiss_ai"):
        st.session_state["ai_suggestion"] = None
        st.rerun()

# Grid
documents = library.visible_documents(selection)
if not documents:
    st.info("No documents match the current filters.")

columns = st.columns(3)
for i, doc in enumerate(documents):
    with columns[i % 3]:
        render_document_card(library, doc, can_edit=actor.is_admin)

render_chat_widget(library, selection)

render_footer()
