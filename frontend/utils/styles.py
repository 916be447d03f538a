"""
Global styles and CSS for the dashboard.
Dark theme with chain-coloured badges.
"""

COLORS = {
    "bg_primary": "#0d1117",
    "bg_secondary": "#161b22",
    "bg_card": "#21262d",
    "bg_hover": "#30363d",
    "border": "#30363d",
    "text_primary": "#f0f6fc",
    "text_secondary": "#8b949e",
    "text_muted": "#6e7681",
    "accent_green": "#3fb950",
    "accent_red": "#f85149",
    "accent_blue": "#58a6ff",
    "accent_purple": "#a371f7",
    "accent_yellow": "#d29922",
}

CHAIN_COLORS = {
    "ethereum": "#627eea",
    "solana": "#9945ff",
    "avalanche": "#e84142",
    "bsc": "#f3ba2f",
    "bitcoin": "#f7931a",
}


def chain_color(chain: str) -> str:
    return CHAIN_COLORS.get((chain or "").lower(), COLORS["accent_blue"])


def get_global_css() -> str:
    """Return global CSS for dark theme styling."""
    return f"""
    <style>
        .asset-card {{
            background: {COLORS['bg_card']};
            border: 1px solid {COLORS['border']};
            border-radius: 12px;
            padding: 16px;
            margin-bottom: 4px;
            transition: all 0.2s ease;
        }}

        .asset-card:hover {{
            background: {COLORS['bg_hover']};
            border-color: {COLORS['accent_blue']};
        }}

        .asset-card-header {{
            display: flex;
            align-items: center;
            gap: 10px;
            margin-bottom: 8px;
        }}

        .asset-card-header img {{
            width: 28px;
            height: 28px;
            border-radius: 50%;
        }}

        .asset-card-title {{
            color: {COLORS['text_primary']};
            font-size: 15px;
            font-weight: 600;
        }}

        .asset-card-symbol {{
            color: {COLORS['text_secondary']};
            font-size: 12px;
            text-transform: uppercase;
        }}

        .asset-card-price {{
            font-size: 22px;
            font-weight: 700;
            color: {COLORS['text_primary']};
        }}

        .asset-card-meta {{
            color: {COLORS['text_secondary']};
            font-size: 12px;
        }}

        .chain-badge {{
            display: inline-block;
            padding: 3px 8px;
            border-radius: 4px;
            font-size: 11px;
            font-weight: 600;
            text-transform: capitalize;
        }}

        .trending-badge {{
            display: inline-flex;
            align-items: center;
            gap: 6px;
            padding: 6px 10px;
            margin: 0 6px 6px 0;
            border-radius: 16px;
            background: {COLORS['bg_card']};
            border: 1px solid {COLORS['border']};
            color: {COLORS['text_primary']};
            font-size: 12px;
        }}

        .trending-badge img {{
            width: 16px;
            height: 16px;
            border-radius: 50%;
        }}

        .news-card {{
            background: {COLORS['bg_card']};
            border-left: 3px solid {COLORS['accent_purple']};
            border-radius: 8px;
            padding: 12px 16px;
            margin-bottom: 10px;
        }}

        .news-card a {{
            color: {COLORS['text_primary']};
            font-weight: 600;
            text-decoration: none;
        }}

        .news-card-body {{
            color: {COLORS['text_secondary']};
            font-size: 13px;
            margin: 6px 0;
        }}

        .wallet-card {{
            background: linear-gradient(135deg, #1a1a2e 0%, #16213e 100%);
            border: 1px solid rgba(99, 102, 241, 0.2);
            border-radius: 14px;
            padding: 18px;
            margin-bottom: 14px;
        }}

        .wallet-address {{
            font-family: monospace;
            color: {COLORS['text_secondary']};
            font-size: 13px;
        }}

        .wallet-balance {{
            font-size: 22px;
            font-weight: 700;
            color: {COLORS['text_primary']};
            margin: 8px 0;
        }}

        .wallet-error {{
            color: {COLORS['accent_red']};
            font-size: 12px;
        }}

        .token-row {{
            display: flex;
            justify-content: space-between;
            color: {COLORS['text_primary']};
            font-size: 13px;
            padding: 4px 0;
            border-top: 1px solid rgba(255, 255, 255, 0.05);
        }}

        .metric-positive {{ color: {COLORS['accent_green']}; }}
        .metric-negative {{ color: {COLORS['accent_red']}; }}
    </style>
    """


def inject_styles():
    """Inject global styles into the Streamlit app."""
    import streamlit as st
    st.markdown(get_global_css(), unsafe_allow_html=True)
