"""HTML clean-up for question text shown inside the exam client."""

from __future__ import annotations

import bleach

# Markdown output of question statements: prose, lists, tables and code samples.
QUESTION_TAGS = frozenset(
    {
        "p", "br", "hr", "blockquote",
        "strong", "em", "b", "i", "sub", "sup",
        "ul", "ol", "li",
        "pre", "code",
        "table", "thead", "tbody", "tr", "th", "td",
    }
)

CELL_ATTRIBUTES = ("colspan", "rowspan", "align")


def _allow_attribute(tag: str, name: str, value: str) -> bool:
    if tag in ("th", "td"):
        return name in CELL_ATTRIBUTES
    if tag == "code" and name == "class":
        # fenced_code marks the language as "language-python" and similar
        return value.startswith("language-")
    return False


_cleaner = bleach.Cleaner(
    tags=QUESTION_TAGS,
    attributes=_allow_attribute,
    protocols=frozenset(),
    strip=True,
    strip_comments=True,
)


def sanitize_html(value: str) -> str:
    """Drop every tag and attribute a question statement has no use for.

    Links and images are removed as well, so a question cannot send the
    student away from the exam page mid-session.
    """

    return _cleaner.clean(value)
