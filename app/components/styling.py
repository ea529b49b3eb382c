import streamlit as st

from escala.models.rules import DAY_STYLES


def day_css_class(weekday_label: str) -> str:
    """CSS class of a shift card header."""
    return "day-" + weekday_label.lower().replace(" ", "-")


def apply_styling():
    """Apply global CSS styling based on the service day styles."""

    css = "<style>\n"
    for label, style in DAY_STYLES.items():
        css += (
            f".{day_css_class(label)} {{ background-color: {style.color_bg}; color: {style.color_text}; "
            f"border: 2px solid {style.color_border}; }}\n"
        )

    css += """
    .shift-card-header { text-align: center; padding: 0.8rem; border-radius: 12px 12px 0 0;
        font-weight: 800; font-size: 1.2rem; letter-spacing: 0.08em; text-transform: uppercase; margin-bottom: 0.5rem; }
    .month-banner { background: #1E3A8A; color: white; border-radius: 16px; padding: 1rem; text-align: center; }
    .month-banner h2 { color: white; margin: 0; letter-spacing: 0.15em; text-transform: uppercase; }
    .month-banner p { color: #BFDBFE; margin: 0; font-weight: bold; letter-spacing: 0.15em; }
    .period-label { font-weight: bold; color: #374151; padding-top: 0.5rem; }

    /* Hide Streamlit deploy button */
    .stDeployButton { display: none !important; }

    </style>
    """

    st.markdown(css, unsafe_allow_html=True)
