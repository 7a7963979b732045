"""
skills/render_pptx.py — Render a Document to .pptx.

Wraps slidy.renderer.pptx_renderer.render.
"""

from pathlib import Path
from typing import Optional

from slidy.dsl.models import Document
from slidy.renderer.pptx_renderer import render as _render


def render(
    document: Document,
    output_dir: str,
    filename: Optional[str] = None,
) -> Path:
    """Render a compiled document to a .pptx file.

    Args:
        document: Document compiled from slide-language text.
        output_dir: Directory to write the output file.
        filename: Optional output file name (default: source stem or "deck").

    Returns:
        Path to the generated .pptx file.
    """
    return _render(
        document=document,
        output_dir=Path(output_dir),
        filename=filename,
    )
