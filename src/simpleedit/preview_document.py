"""
Wrap an HTML fragment in the preview document template.
"""

from simpleedit.editor_style import EditorStyle


def build_preview_html(body: str, style: EditorStyle) -> str:
    """
    Build a complete HTML document for the preview pane.

    Args:
        body: HTML fragment rendered from the Markdown source
        style: Theme supplying the stylesheet

    Returns:
        The full HTML document
    """
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<style>\n{style.markdown_css()}</style>\n"
        "</head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )
