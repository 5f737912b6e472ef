# Utility modules for Sunday Table
from .sanitizer import sanitize_line, sanitize_multiline, sanitize_external_text
