"""
Global styles and CSS for the trading UI.
Light theme using the Bootstrap 5 palette.
"""

COLORS = {
    "bg_primary": "#ffffff",
    "bg_secondary": "#f8f9fa",
    "bg_card": "#ffffff",
    "bg_navbar": "#212529",
    "border": "#dee2e6",
    "text_primary": "#212529",
    "text_secondary": "#6c757d",
    "primary": "#0d6efd",
    "success": "#198754",
    "danger": "#dc3545",
    "warning": "#ffc107",
    "info": "#0dcaf0",
}


def get_global_css() -> str:
    """Return global CSS for the Bootstrap-like look."""
    return f"""
    <style>
        .stat-card {{
            background: {COLORS['bg_card']};
            border: 1px solid {COLORS['border']};
            border-radius: 0.375rem;
            padding: 16px;
            margin-bottom: 12px;
            height: 100%;
        }}

        .stat-card.center {{
            text-align: center;
        }}

        .stat-card-title {{
            color: {COLORS['text_primary']};
            font-size: 1.1rem;
            font-weight: 500;
            margin-bottom: 8px;
        }}

        .stat-card-value {{
            font-size: 1.75rem;
            font-weight: 500;
        }}

        .text-primary {{ color: {COLORS['primary']}; }}
        .text-success {{ color: {COLORS['success']}; }}
        .text-danger {{ color: {COLORS['danger']}; }}
        .text-warning {{ color: {COLORS['warning']}; }}
        .text-info {{ color: {COLORS['info']}; }}
        .text-muted {{ color: {COLORS['text_secondary']}; }}

        .badge {{
            display: inline-block;
            padding: 0.35em 0.65em;
            border-radius: 0.375rem;
            font-size: 0.75em;
            font-weight: 700;
            color: #fff;
            margin-right: 4px;
        }}

        .bg-primary {{ background: {COLORS['primary']}; }}
        .bg-success {{ background: {COLORS['success']}; }}
        .bg-danger {{ background: {COLORS['danger']}; }}
        .bg-warning {{ background: {COLORS['warning']}; color: #000; }}
        .bg-info {{ background: {COLORS['info']}; color: #000; }}

        .brand {{
            font-weight: 700;
            font-size: 1.25rem;
        }}
    </style>
    """


def inject_styles():
    """Inject global styles into the Streamlit app."""
    import streamlit as st
    st.markdown(get_global_css(), unsafe_allow_html=True)
