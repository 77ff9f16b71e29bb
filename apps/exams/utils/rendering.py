from __future__ import annotations

import markdown
from django.utils.safestring import mark_safe

from apps.exams.utils.sanitize import sanitize_html

_MARKDOWN_EXTENSIONS = [
    "markdown.extensions.extra",
    "markdown.extensions.sane_lists",
]


def render_question_text(text: str | None) -> str:
    """Render question Markdown (fenced code included) to sanitised HTML."""

    if not text:
        return ""
    html = markdown.markdown(
        text,
        extensions=_MARKDOWN_EXTENSIONS,
        output_format="html",
    )
    return mark_safe(sanitize_html(html))
