import streamlit as st

from src.library.controller import DocumentLibrary
from src.library.models import Document
from src.ui.styles.theme import document_card_html


def render_document_card(library: DocumentLibrary, doc: Document, can_edit: bool):
    st.markdown(
        document_card_html(doc, library.site_name(doc.site_id)), unsafe_allow_html=True
    )

    st.link_button("View document", doc.external_url, use_container_width=True)

    if st.button("Explain with AI", key=f"explain_{doc.id}", use_container_width=True):
        with st.spinner("Asking the assistant..."):
            st.session_state[f"explanation_{doc.id}"] = library.explain_document(doc.id)
    explanation = st.session_state.get(f"explanation_{doc.id}")
    if explanation:
        st.caption(explanation)

    if can_edit:
        edit_col, delete_col = st.columns(2)
        with edit_col:
            if st.button("✎ Edit", key=f"edit_{doc.id}", use_container_width=True):
                st.session_state["editing_doc_id"] = doc.id
                st.session_state["doc_form_open"] = True
                st.rerun()
        with delete_col:
            if st.button("✕ Delete", key=f"delete_{doc.id}", use_container_width=True):
                library.delete_document(doc.id)
                st.rerun()
