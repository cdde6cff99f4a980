import sys
from pathlib import Path

# Ensure src is in python path
src_path = Path(__file__).parent.parent.parent.resolve()
if str(src_path) not in sys.path:
    sys.path.append(str(src_path))

import streamlit as st  # noqa: E402

from src.library.errors import AccountNotFoundError, InvalidCredentialsError  # noqa: E402
from src.ui.components.library import get_library  # noqa: E402
from src.ui.styles.theme import apply_theme, render_footer  # noqa: E402

# Must be the very first st call
st.set_page_config(page_title="IndusDocs | Login", page_icon="📄", layout="centered")

apply_theme()

library = get_library()

# Session restored from the store survives a page reload
if library.actor is not None:
    st.switch_page("pages/1_Documents.py")

st.markdown(
    """
<div class="login-card">
    <h1 style="font-size: 2.2em; margin-bottom: 0;">INDUSDOCS</h1>
    <p style="color: #94a3b8; font-weight: bold; margin-top: 5px;">Doc Manager</p>
</div>
""",
    unsafe_allow_html=True,
)

st.write("")

with st.form("login_form"):
    email = st.text_input("Corporate e-mail")
    password = st.text_input("Password", type="password")
    submitted = st.form_submit_button("Sign in", use_container_width=True)

if submitted:
    try:
        library.login(email, password)
    except InvalidCredentialsError:
        st.error("Invalid credentials")
    else:
        st.switch_page("pages/1_Documents.py")

with st.expander("Forgot your password?"):
    st.markdown(
        "Enter your corporate e-mail and we will send you the instructions to reset your password."
    )
    recovery_email = st.text_input("E-mail", placeholder="example@indudocs.com", key="recovery_email")
    if st.button("Send instructions", disabled=not recovery_email):
        with st.spinner("Processing request..."):
            try:
                result = library.recover_password(recovery_email)
            except AccountNotFoundError as exc:
                st.error(str(exc))
            else:
                st.success(f"Request sent to {result.email}")
                st.markdown(result.message)

st.write("")
st.info("ℹ️ **DEMO ACCOUNTS** — admin@indudocs.com / admin · juan@indudocs.com / user123")

render_footer()
