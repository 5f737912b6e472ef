"""
Input Sanitization Module

Cleans user input and externally fetched text before it is stored or
passed on. Values are kept as typed apart from control characters and
length limits; escaping for display is left to whoever renders them.
"""

import re

# Control characters except tab, newline and carriage return
_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')

# Every control character, including line breaks
_ALL_CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f-\x9f]')


def sanitize_line(text, max_length=200):
    """
    Sanitize a single-line field such as a meal name.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 200)

    Returns:
        Cleaned string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    # Line breaks and other control characters become nothing
    text = _ALL_CONTROL_CHARS.sub('', text)

    if len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_multiline(text, max_length=5000):
    """
    Sanitize free text such as meal notes.

    Preserves newlines and tabs for formatting.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 5000)

    Returns:
        Cleaned string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = _CONTROL_CHARS.sub('', text)

    if len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_external_text(text, max_length=500):
    """
    Sanitize a string received from the suggestion service.

    Non-string values are rejected (returned as empty) rather than
    converted, since they indicate a malformed payload.
    """
    if not isinstance(text, str):
        return ''

    text = _ALL_CONTROL_CHARS.sub(' ', text).strip()
    text = re.sub(r'\s+', ' ', text)

    if len(text) > max_length:
        text = text[:max_length - 3] + '...'

    return text
