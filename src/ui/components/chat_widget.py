import streamlit as st

from src.library.controller import DocumentLibrary
from src.library.filters import DocumentFilter


def render_chat_widget(library: DocumentLibrary, selection: DocumentFilter):
    # Seeded with the documents currently on screen
    chat = library.chat(selection)

    with st.popover("💬 IndusBot", use_container_width=False):
        st.markdown(
            "<div style='font-weight: bold; color: var(--primary-accent);'>IndusBot · Safety assistant</div>",  # noqa: E501
            unsafe_allow_html=True,
        )

        for message in chat.messages:
            with st.chat_message("user" if message.role == "user" else "assistant"):
                if message.is_fallback:
                    st.warning("⚠️ The assistant is unavailable. Please try again.")
                else:
                    st.markdown(message.text)

        with st.form("chat_form", clear_on_submit=True):
            text = st.text_input("Message", placeholder="...", label_visibility="collapsed")
            sent = st.form_submit_button("Send")

        if sent and text.strip():
            with st.spinner("IndusBot is typing..."):
                chat.send(text)
            st.rerun()
