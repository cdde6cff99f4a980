import html
import sys
from pathlib import Path

# Ensure src is in python path
src_path = Path(__file__).parent.parent.parent.resolve()
if str(src_path) not in sys.path:
    sys.path.append(str(src_path))

import streamlit as st  # noqa: E402
from pydantic import ValidationError  # noqa: E402

from src.library.models import SiteDraft, UserDraft  # noqa: E402
from src.ui.components.library import get_library, require_login  # noqa: E402
from src.ui.components.sidebar import render_sidebar  # noqa: E402
from src.ui.styles.theme import apply_theme, render_footer, site_card_html  # noqa: E402

try:
    st.set_page_config(page_title="IndusDocs | Administration", page_icon="🏭", layout="wide")
except Exception:
    pass

apply_theme()

library = get_library()
actor = require_login(library)

# Guard: administrators only
if not actor.is_admin:
    st.switch_page("pages/1_Documents.py")

render_sidebar(library, actor)

users_tab, sites_tab = st.tabs(["Personnel", "Work sites"])

# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

with users_tab:
    st.markdown("## Personnel")

    for user in library.state.users:
        name_col, site_col, role_col, action_col = st.columns([3, 2, 1, 2])
        name_col.markdown(
            f"**{html.escape(user.name)}**  \n<small>{html.escape(user.email)}</small>",
            unsafe_allow_html=True,
        )
        site_col.write(library.site_name(user.site_affinity, "Global"))
        role_col.write(user.role)
        edit_col, delete_col = action_col.columns(2)
        if edit_col.button("Edit", key=f"edit_user_{user.id}"):
            st.session_state["editing_user_id"] = user.id
        if delete_col.button("Delete", key=f"delete_user_{user.id}"):
            library.delete_user(user.id)
            st.rerun()

    editing_id = st.session_state.get("editing_user_id")
    editing = next((u for u in library.state.users if u.id == editing_id), None)
    site_ids = [s.id for s in library.state.sites]

    with st.form("user_form", clear_on_submit=True):
        st.subheader(f"Edit {editing.name}" if editing else "New user")
        name = st.text_input("Full name", value=editing.name if editing else "")
        email = st.text_input("E-mail", value=editing.email if editing else "")
        role = st.selectbox(
            "Role",
            ["OPERARIO", "ADMIN"],
            index=1 if editing and editing.is_admin else 0,
        )
        site_affinity = st.selectbox(
            "Assigned site (operators)",
            site_ids,
            index=(
                site_ids.index(editing.site_affinity)
                if editing and editing.site_affinity in site_ids
                else 0
            ),
            format_func=library.site_name,
        )
        password = st.text_input(
            "Password" + (" (leave blank to keep)" if editing else ""), type="password"
        )
        save_col, cancel_col = st.columns(2)
        save = save_col.form_submit_button("Save", use_container_width=True)
        cancel = cancel_col.form_submit_button("Cancel", use_container_width=True)

    if cancel:
        st.session_state["editing_user_id"] = None
        st.rerun()

    if save:
        if not (name and email and (editing or password)):
            st.error("Name, e-mail and password are required.")
        else:
            draft = UserDraft(
                name=name,
                email=email,
                role=role,
                password=password,
                site_affinity=site_affinity if role == "OPERARIO" else None,
            )
            try:
                library.save_user(draft, editing_id=editing.id if editing else None)
            except ValidationError as e:
                st.error(f"⚠️ User could not be saved. ({e.error_count()} invalid field(s))")
            else:
                st.session_state["editing_user_id"] = None
                st.rerun()

# ---------------------------------------------------------------------------
# Sites
# ---------------------------------------------------------------------------

with sites_tab:
    st.markdown("## Work sites")

    columns = st.columns(3)
    for i, site in enumerate(library.state.sites):
        with columns[i % 3]:
            st.markdown(site_card_html(site), unsafe_allow_html=True)
            edit_col, delete_col = st.columns(2)
            if edit_col.button("Edit", key=f"edit_site_{site.id}", use_container_width=True):
                st.session_state["editing_site_id"] = site.id
            if delete_col.button("Delete", key=f"delete_site_{site.id}", use_container_width=True):
                st.session_state["confirm_delete_site"] = site.id

    pending = st.session_state.get("confirm_delete_site")
    if pending:
        st.warning(
            f"Deleting '{library.site_name(pending)}' leaves its users and documents without a site. Continue?"  # noqa: E501
        )
        yes_col, no_col = st.columns(2)
        if yes_col.button("Delete site", key="confirm_site_yes"):
            library.delete_site(pending)
            st.session_state["confirm_delete_site"] = None
            st.rerun()
        if no_col.button("Cancel", key="confirm_site_no"):
            st.session_state["confirm_delete_site"] = None
            st.rerun()

    editing_id = st.session_state.get("editing_site_id")
    editing_site = next((s for s in library.state.sites if s.id == editing_id), None)

    with st.form("site_form", clear_on_submit=True):
        st.subheader(f"Edit {editing_site.name}" if editing_site else "New site")
        site_name = st.text_input("Name", value=editing_site.name if editing_site else "")
        location = st.text_input(
            "Location", value=(editing_site.location or "") if editing_site else ""
        )
        save_col, cancel_col = st.columns(2)
        save_site = save_col.form_submit_button("Save", use_container_width=True)
        cancel_site = cancel_col.form_submit_button("Cancel", use_container_width=True)

    if cancel_site:
        st.session_state["editing_site_id"] = None
        st.rerun()

    if save_site:
        if not site_name:
            st.error("Site name is required.")
        else:
            library.save_site(
                SiteDraft(name=site_name, location=location or None),
                editing_id=editing_site.id if editing_site else None,
            )
            st.session_state["editing_site_id"] = None
            st.rerun()

render_footer()
