"""
Input sanitisation for user-supplied text.

These run before validation on anything that is stored and later shown to
other members (names, chat messages, announcements).
"""

import html
import re
from typing import Optional

from utils.constants import MESSAGE_MAX_LENGTH

# Control characters except \t (0x09) and \n (0x0A)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B-\x1F\x7F]")
_MULTI_SPACES = re.compile(r"[ \t]{2,}")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_HTML_TAGS = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def sanitize_string(value: Optional[str]) -> str:
    if not value:
        return ""
    value = value.replace("\r\n", "\n").replace("\r", "\n")
    value = _CONTROL_CHARS.sub("", value)
    value = _MULTI_SPACES.sub(" ", value)
    value = _EXCESS_NEWLINES.sub("\n\n", value)
    return value.strip()


def sanitize_message_content(value: Optional[str]) -> str:
    return sanitize_string(value)[:MESSAGE_MAX_LENGTH]


def sanitize_name(value: Optional[str], max_length: int = 100) -> str:
    value = _CONTROL_CHARS.sub("", value or "")
    return _WHITESPACE.sub(" ", value).strip()[:max_length]


def sanitize_email(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    value = value.strip().lower()
    if len(value) > 255 or not _EMAIL.match(value):
        return None
    return value


def strip_html_tags(value: Optional[str]) -> str:
    return _HTML_TAGS.sub("", value or "")


def escape_html(value: Optional[str]) -> str:
    return html.escape(value or "", quote=True)
