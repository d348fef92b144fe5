"""
Editor themes.

Each theme supplies the colours and fonts used when styling Markdown in the
editor, and the CSS tokens used to build the preview stylesheet.
"""

from dataclasses import dataclass
from typing import Dict, List

from simpleedit.color_role import ColorRole


@dataclass(frozen=True)
class CSSTokens:
    """Values substituted into the preview stylesheet."""

    font_family: str
    font_size: str
    body_color: str
    body_bg: str
    link_color: str
    code_bg: str
    code_font_family: str
    blockquote_border_color: str
    blockquote_text_color: str
    hr_color: str
    table_border_color: str
    th_bg: str
    tr_even_bg: str


@dataclass(frozen=True)
class EditorStyle:
    """A named editor theme."""

    name: str
    font_families: List[str]
    font_size: float
    heading_font_families: List[str]
    code_font_families: List[str]
    colors: Dict[ColorRole, str]
    css: CSSTokens

    def get_color_str(self, role: ColorRole) -> str:
        """
        Get a colour string for a specific role.

        Args:
            role: The ColorRole to look up

        Returns:
            str: The colour string for the role

        Raises:
            KeyError: If no colour is defined for the role
        """
        return self.colors[role]

    def markdown_css(self) -> str:
        """Build the preview stylesheet for this theme."""
        t = self.css
        return f"""body {{
    font-family: {t.font_family};
    font-size: {t.font_size};
    line-height: 1.6;
    max-width: 720px;
    margin: 0 auto;
    padding: 20px 24px;
    color: {t.body_color};
    background: {t.body_bg};
}}

h1 {{ font-size: 28px; font-weight: 700; margin: 24px 0 12px; }}
h2 {{ font-size: 22px; font-weight: 700; margin: 20px 0 10px; }}
h3 {{ font-size: 18px; font-weight: 600; margin: 18px 0 8px; }}
h4 {{ font-size: 16px; font-weight: 600; margin: 16px 0 6px; }}
h5 {{ font-size: 14px; font-weight: 600; margin: 14px 0 4px; }}
h6 {{ font-size: 12px; font-weight: 600; margin: 12px 0 4px; }}

p {{ margin: 0 0 12px; }}

a {{ color: {t.link_color}; text-decoration: none; }}
a:hover {{ text-decoration: underline; }}

code {{
    font-family: {t.code_font_family};
    font-size: 12px;
    background: {t.code_bg};
    padding: 2px 6px;
    border-radius: 4px;
}}

pre {{
    background: {t.code_bg};
    padding: 12px 16px;
    border-radius: 8px;
    overflow-x: auto;
    line-height: 1.15;
}}
pre code {{ background: none; padding: 0; }}

blockquote {{
    margin: 0 0 12px;
    padding: 4px 16px;
    border-left: 3px solid {t.blockquote_border_color};
    color: {t.blockquote_text_color};
}}

img {{ max-width: 100%; height: auto; border-radius: 8px; }}

hr {{ border: none; border-top: 1px solid {t.hr_color}; margin: 20px 0; }}

ul, ol {{ padding-left: 24px; margin: 0 0 12px; }}
li {{ margin: 4px 0; }}
li input[type="checkbox"] {{ margin-right: 6px; }}

del {{ color: {t.blockquote_text_color}; }}

table {{
    border-collapse: collapse;
    width: 100%;
    margin: 12px 0;
    font-size: 13px;
}}
th, td {{
    border: 1px solid {t.table_border_color};
    padding: 8px 12px;
    text-align: left;
}}
th {{ font-weight: 600; background-color: {t.th_bg}; }}
tr:nth-child(even) td {{ background-color: {t.tr_even_bg}; }}
"""


_MONOSPACE_FONTS = ["SF Mono", "Menlo", "Consolas", "Monaco", "monospace"]
_SYSTEM_FONTS = ["SF Pro Text", "Helvetica Neue", "Segoe UI", "Arial", "sans-serif"]
_SYSTEM_CSS_FONT = "-apple-system, BlinkMacSystemFont, 'SF Pro Text', 'Helvetica Neue', sans-serif"
_MONOSPACE_CSS_FONT = "'SF Mono', Menlo, monospace"


def _editor_colors(
    text: str,
    background: str,
    accent: str,
    code: str,
    code_background: str,
    secondary: str,
    marker: str,
    rule: str
) -> Dict[ColorRole, str]:
    """Build the colour table for a theme from its handful of base colours."""
    return {
        ColorRole.EDITOR_TEXT: text,
        ColorRole.EDITOR_BACKGROUND: background,
        ColorRole.HEADING: text,
        ColorRole.BOLD: text,
        ColorRole.ITALIC: text,
        ColorRole.CODE: code,
        ColorRole.CODE_BACKGROUND: code_background,
        ColorRole.LINK: accent,
        ColorRole.BLOCKQUOTE_TEXT: secondary,
        ColorRole.HORIZONTAL_RULE: rule,
        ColorRole.STRIKETHROUGH: secondary,
        ColorRole.SYNTAX_MARKER: marker,
    }


LIGHT = EditorStyle(
    name="Light",
    font_families=_MONOSPACE_FONTS,
    font_size=13,
    heading_font_families=_SYSTEM_FONTS,
    code_font_families=_MONOSPACE_FONTS,
    colors=_editor_colors(
        text="#000000", background="#ffffff", accent="#0071e3", code="#c45f00",
        code_background="#0a000000", secondary="#6e6e73", marker="#a1a1a6", rule="#d2d2d7"
    ),
    css=CSSTokens(
        font_family=_SYSTEM_CSS_FONT,
        font_size="14px",
        body_color="#1d1d1f",
        body_bg="#ffffff",
        link_color="#0071e3",
        code_bg="rgba(0,0,0,0.04)",
        code_font_family=_MONOSPACE_CSS_FONT,
        blockquote_border_color="#0071e3",
        blockquote_text_color="#6e6e73",
        hr_color="#d2d2d7",
        table_border_color="#d2d2d7",
        th_bg="rgba(0,0,0,0.04)",
        tr_even_bg="rgba(0,0,0,0.02)"
    )
)

DARK = EditorStyle(
    name="Dark",
    font_families=_MONOSPACE_FONTS,
    font_size=13,
    heading_font_families=_SYSTEM_FONTS,
    code_font_families=_MONOSPACE_FONTS,
    colors=_editor_colors(
        text="#d4d4d4", background="#1e1e1e", accent="#64d2ff", code="#ff9f0a",
        code_background="#0fffffff", secondary="#a1a1a6", marker="#6e6e73", rule="#38383a"
    ),
    css=CSSTokens(
        font_family=_SYSTEM_CSS_FONT,
        font_size="14px",
        body_color="#d4d4d4",
        body_bg="#1e1e1e",
        link_color="#64d2ff",
        code_bg="rgba(255,255,255,0.06)",
        code_font_family=_MONOSPACE_CSS_FONT,
        blockquote_border_color="#64d2ff",
        blockquote_text_color="#a1a1a6",
        hr_color="#38383a",
        table_border_color="#38383a",
        th_bg="rgba(255,255,255,0.08)",
        tr_even_bg="rgba(255,255,255,0.04)"
    )
)

VINTAGE_TERMINAL = EditorStyle(
    name="Vintage Terminal",
    font_families=["Courier", "Courier New", "monospace"],
    font_size=14,
    heading_font_families=["Courier", "Courier New", "monospace"],
    code_font_families=["Courier", "Courier New", "monospace"],
    colors=_editor_colors(
        text="#33ff00", background="#2b1d0e", accent="#ffcc00", code="#99ff66",
        code_background="#1433ff00", secondary="#77cc44", marker="#4d9926", rule="#33ff00"
    ),
    css=CSSTokens(
        font_family="Courier, 'Courier New', monospace",
        font_size="14px",
        body_color="#33ff00",
        body_bg="#2b1d0e",
        link_color="#ffcc00",
        code_bg="rgba(51,255,0,0.08)",
        code_font_family="Courier, 'Courier New', monospace",
        blockquote_border_color="#33ff00",
        blockquote_text_color="#77cc44",
        hr_color="#33ff00",
        table_border_color="rgba(51,255,0,0.25)",
        th_bg="rgba(51,255,0,0.08)",
        tr_even_bg="rgba(51,255,0,0.04)"
    )
)

ELEGANT = EditorStyle(
    name="Elegant",
    font_families=["Georgia", "Times New Roman", "serif"],
    font_size=15,
    heading_font_families=["Georgia", "Times New Roman", "serif"],
    code_font_families=_MONOSPACE_FONTS,
    colors=_editor_colors(
        text="#3b2f24", background="#f5f0e8", accent="#8b4513", code="#8b4513",
        code_background="#0f8b4513", secondary="#7a6a5a", marker="#b0a090", rule="#c4b5a0"
    ),
    css=CSSTokens(
        font_family="Georgia, 'Times New Roman', serif",
        font_size="15px",
        body_color="#3b2f24",
        body_bg="#f5f0e8",
        link_color="#8b4513",
        code_bg="rgba(139,69,19,0.06)",
        code_font_family=_MONOSPACE_CSS_FONT,
        blockquote_border_color="#8b4513",
        blockquote_text_color="#7a6a5a",
        hr_color="#c4b5a0",
        table_border_color="#c4b5a0",
        th_bg="rgba(139,69,19,0.06)",
        tr_even_bg="rgba(139,69,19,0.03)"
    )
)

NORD = EditorStyle(
    name="Nord",
    font_families=_MONOSPACE_FONTS,
    font_size=13,
    heading_font_families=_SYSTEM_FONTS,
    code_font_families=_MONOSPACE_FONTS,
    colors=_editor_colors(
        text="#d8dee9", background="#2e3440", accent="#88c0d0", code="#ebcb8b",
        code_background="#1488c0d0", secondary="#81a1c1", marker="#616e88", rule="#4c566a"
    ),
    css=CSSTokens(
        font_family=_SYSTEM_CSS_FONT,
        font_size="14px",
        body_color="#d8dee9",
        body_bg="#2e3440",
        link_color="#88c0d0",
        code_bg="rgba(136,192,208,0.08)",
        code_font_family=_MONOSPACE_CSS_FONT,
        blockquote_border_color="#88c0d0",
        blockquote_text_color="#81a1c1",
        hr_color="#4c566a",
        table_border_color="#4c566a",
        th_bg="rgba(136,192,208,0.08)",
        tr_even_bg="rgba(136,192,208,0.04)"
    )
)

SOLARIZED = EditorStyle(
    name="Solarized",
    font_families=["Menlo", "SF Mono", "monospace"],
    font_size=13,
    heading_font_families=["Menlo", "SF Mono", "monospace"],
    code_font_families=["Menlo", "SF Mono", "monospace"],
    colors=_editor_colors(
        text="#657b83", background="#fdf6e3", accent="#268bd2", code="#cb4b16",
        code_background="#0f268bd2", secondary="#93a1a1", marker="#b5bdb8", rule="#eee8d5"
    ),
    css=CSSTokens(
        font_family="Menlo, 'SF Mono', monospace",
        font_size="13px",
        body_color="#657b83",
        body_bg="#fdf6e3",
        link_color="#268bd2",
        code_bg="rgba(38,139,210,0.06)",
        code_font_family="Menlo, 'SF Mono', monospace",
        blockquote_border_color="#268bd2",
        blockquote_text_color="#93a1a1",
        hr_color="#eee8d5",
        table_border_color="#eee8d5",
        th_bg="rgba(38,139,210,0.06)",
        tr_even_bg="rgba(38,139,210,0.03)"
    )
)

EDITOR_STYLES: List[EditorStyle] = [LIGHT, DARK, VINTAGE_TERMINAL, ELEGANT, NORD, SOLARIZED]


def find_editor_style(name: str) -> EditorStyle:
    """
    Look up a theme by name.

    Args:
        name: Theme name; matching ignores case

    Returns:
        The matching theme, or the Light theme if there is no match
    """
    for style in EDITOR_STYLES:
        if style.name.lower() == name.lower():
            return style

    return LIGHT
