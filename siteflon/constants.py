"""Constants used across the siteflon package."""

from __future__ import annotations

# Markup characters, keyed by the construct they introduce
MARKERS = {
    "escape": "\\",
    "raw_begin": "{",
    "raw_end": "}",
    "bold": "*",
    "italics": "/",
    "underline": "_",
    "rule": "-",
    "line_break": ";",
    "link": "@",
    "image": "!",
    "code": "`",
    "heading": "#",
    "newline": "\n",
}

# Link and image delimiters: @[label](target), ![alt::width::height](target)
LABEL_OPEN = "["
LABEL_CLOSE = "]"
TARGET_OPEN = "("
TARGET_CLOSE = ")"
DIMENSION_SEPARATOR = ":"

MAX_HEADING_LEVEL = 6
RULE_LENGTH = 3

# Document shell wrapped around the compiled fragment
DEFAULT_STYLESHEET = "styles.css"
DOCUMENT_HEADER_TEMPLATE = (
    "<!doctype HTML><html><head>"
    '<link rel="stylesheet" href="{stylesheet}">'
    '</head><body><div id="content">'
)
DOCUMENT_FOOTER = "</div></body></html>"

SOURCE_EXTENSIONS = (".sf", ".siteflon", ".txt")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
