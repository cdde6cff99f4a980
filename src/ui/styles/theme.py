import html
from typing import assert_never

import streamlit as st

from src.library.models import DocType, Document, Site, doc_type_icon, doc_type_label


def badge_colors(doc_type: DocType) -> tuple[str, str]:
    """(background, text) colours for a document type badge."""
    match doc_type:
        case "SAFETY_SHEET":
            return "#fff1f2", "#be123c"
        case "WORK_INSTRUCTION":
            return "#ecfdf5", "#047857"
        case "TECH_SHEET":
            return "#f0f9ff", "#0369a1"
        case "MACHINE_MANUAL":
            return "#fffbeb", "#b45309"
        case _:
            assert_never(doc_type)


# ---------------------------------------------------------------------------
# Card markup. Every stored value is escaped before it reaches the page.
# ---------------------------------------------------------------------------


def document_card_html(doc: Document, site_label: str) -> str:
    background, color = badge_colors(doc.doc_type)
    return f"""
    <div class="doc-card">
        <span class="doc-badge" style="background-color: {background}; color: {color};">
            {doc_type_icon(doc.doc_type)} {doc_type_label(doc.doc_type)}
        </span>
        <div style="font-weight: bold; font-size: 1.1em; margin-top: 0.6rem;">{html.escape(doc.title)}</div>
        <div style="color: #64748b; font-size: 0.85em;">{html.escape(doc.description)}</div>
        <div class="doc-meta">
            <span>{html.escape(site_label)}</span>
            <span>{doc.last_updated.isoformat()}</span>
        </div>
    </div>
    """


def site_card_html(site: Site) -> str:
    location = html.escape(site.location or "Location not specified")
    return f"""
    <div class="doc-card">
        <div style="font-weight: bold; font-size: 1.2em;">{html.escape(site.name)}</div>
        <div style="color: #64748b;">📍 {location}</div>
    </div>
    """


def ai_banner_html(text: str) -> str:
    return f"""
    <div class="ai-banner">
        <div style="font-size: 0.65rem; font-weight: bold; letter-spacing: 2px; color: #6366f1;">AI ANALYST</div>
        <div>{html.escape(text)}</div>
    </div>
    """


def apply_theme():
    st.markdown(
        """
        <style>
        :root {
            --bg-color: #f8fafc;
            --surface-color: #ffffff;
            --primary-accent: #1a2b3c;
            --secondary-accent: #4f46e5;
            --text-primary: #1e293b;
            --text-muted: #94a3b8;
            --danger-color: #dc2626;
            --border-color: #e2e8f0;
        }

        .stApp {
            background-color: var(--bg-color);
            color: var(--text-primary);
        }

        h1, h2, h3 {
            color: var(--primary-accent) !important;
        }

        .stButton > button {
            background-color: var(--primary-accent) !important;
            color: #ffffff !important;
            border-radius: 10px !important;
            border: 1px solid var(--primary-accent) !important;
            font-weight: bold;
        }

        [data-testid="stSidebar"] {
            background-color: #ffffff !important;
            border-right: 1px solid var(--border-color) !important;
        }

        .login-card {
            max-width: 480px;
            margin: 0 auto;
            background-color: var(--surface-color);
            padding: 2rem;
            border-radius: 16px;
            border: 1px solid var(--border-color);
            text-align: center;
        }

        .doc-card {
            background-color: var(--surface-color);
            padding: 1.2rem;
            border: 1px solid var(--border-color);
            border-radius: 16px;
            margin-bottom: 0.5rem;
        }

        .doc-badge {
            display: inline-block;
            font-size: 0.65rem;
            font-weight: bold;
            padding: 2px 8px;
            border-radius: 6px;
            text-transform: uppercase;
            letter-spacing: 1px;
        }

        .doc-meta {
            display: flex;
            justify-content: space-between;
            font-size: 0.65rem;
            color: var(--text-muted);
            text-transform: uppercase;
            letter-spacing: 1px;
            margin-top: 0.8rem;
            padding-top: 0.6rem;
            border-top: 1px solid var(--border-color);
        }

        .ai-banner {
            background-color: #eef2ff;
            border: 1px solid #e0e7ff;
            color: #312e81;
            border-radius: 12px;
            padding: 0.8rem 1rem;
            margin-bottom: 1rem;
        }

        .indus-footer {
            margin-top: 4rem;
            border-top: 1px solid var(--border-color);
            padding-top: 1rem;
            text-align: center;
            font-size: 0.75rem;
            color: var(--text-muted);
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_footer():
    st.markdown(
        """
        <div class="indus-footer">
            INDUSDOCS DOC MANAGER | SAFETY FIRST | INTERNAL USE ONLY
        </div>
        """,
        unsafe_allow_html=True,
    )
