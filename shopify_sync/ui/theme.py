from __future__ import annotations

COLORS = {
    "primary": "#008060",
    "primary_hover": "#006E52",
    "danger": "#D72C0D",
    "success": "#2E9E5B",
    "warning": "#E6A23C",
    "background": "#F6F6F7",
    "surface": "#FFFFFF",
    "border": "#C9CCCF",
    "text_primary": "#202223",
    "text_secondary": "#6D7175",
}

SPACING = {
    "xs": 4,
    "sm": 8,
    "md": 12,
    "lg": 16,
}

RADIUS = {
    "sm": 4,
    "md": 8,
}

TONE_COLORS = {
    "success": COLORS["success"],
    "pending": COLORS["warning"],
    "error": COLORS["danger"],
}


def tone_color(tone: str) -> str:
    return TONE_COLORS.get(tone, COLORS["text_secondary"])


def build_stylesheet() -> str:
    return f"""
QWidget {{
    background-color: {COLORS['background']};
    color: {COLORS['text_primary']};
    font-size: 13px;
}}

QLabel[role="secondary"] {{
    color: {COLORS['text_secondary']};
    font-size: 12px;
}}

QLabel[role="subtitle"] {{
    font-size: 15px;
    font-weight: 600;
}}

QPushButton {{
    background-color: {COLORS['surface']};
    color: {COLORS['text_primary']};
    border: 1px solid {COLORS['border']};
    border-radius: {RADIUS['sm']}px;
    padding: {SPACING['xs']}px {SPACING['md']}px;
}}

QPushButton:hover {{
    border-color: {COLORS['primary']};
}}

QPushButton:disabled {{
    color: {COLORS['text_secondary']};
    background-color: {COLORS['background']};
}}

QPushButton[variant="primary"] {{
    background-color: {COLORS['primary']};
    color: {COLORS['surface']};
    border: 1px solid {COLORS['primary']};
}}

QPushButton[variant="primary"]:hover {{
    background-color: {COLORS['primary_hover']};
    border-color: {COLORS['primary_hover']};
}}

QLineEdit {{
    background-color: {COLORS['surface']};
    border: 1px solid {COLORS['border']};
    border-radius: {RADIUS['sm']}px;
    padding: {SPACING['xs']}px;
}}

QLineEdit:focus {{
    border: 1px solid {COLORS['primary']};
}}

QListWidget,
QTableView {{
    background-color: {COLORS['surface']};
    border: 1px solid {COLORS['border']};
    border-radius: {RADIUS['sm']}px;
    selection-background-color: {COLORS['primary']};
    selection-color: {COLORS['surface']};
}}

QTableView {{
    gridline-color: {COLORS['background']};
}}

QStatusBar {{
    color: {COLORS['text_secondary']};
}}
"""
