"""
Noteful Backend — Free-Text Sanitization
=========================================

What:  Removes `onerror` event-handler attributes from `<img>` tags.
Who:   Called by the response schemas for Folder.title, Note.name and Note.content.

This is a targeted rule for one payload shape, not an HTML sanitizer.
Every other piece of markup is returned as stored:

    >>> strip_unsafe_attributes('<img src="x" onerror="alert(1)"> <strong>ok</strong>')
    '<img src="x"> <strong>ok</strong>'
"""

import re
from typing import Optional

# Quoted attribute values may contain `>`, so they are consumed whole.
_IMG_TAG = re.compile(r"""<img\b(?:"[^"]*"|'[^']*'|[^"'>])*>""", re.IGNORECASE)

# Leading whitespace is removed together with the attribute so that
# `<img src="x" onerror="...">` collapses to `<img src="x">`.
_ONERROR_ATTR = re.compile(
    r"""\s+onerror\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'>]+)""",
    re.IGNORECASE,
)


def _strip_img_tag(match: "re.Match[str]") -> str:
    return _ONERROR_ATTR.sub("", match.group(0))


def strip_unsafe_attributes(value: Optional[str]) -> Optional[str]:
    """Return `value` with `onerror` attributes dropped from every `<img>` tag."""
    if not value:
        return value
    return _IMG_TAG.sub(_strip_img_tag, value)
