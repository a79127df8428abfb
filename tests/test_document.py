from __future__ import annotations

import pytest

from siteflon.config import ConfigError, SiteflonConfig
from siteflon.document import convert, wrap_document
from siteflon.exceptions import MalformedConstructError

EXPECTED_HEADER = (
    "<!doctype HTML><html><head>"
    '<link rel="stylesheet" href="styles.css">'
    '</head><body><div id="content">'
)
EXPECTED_FOOTER = "</div></body></html>"


def test_wrap_document_adds_fixed_shell():
    assert wrap_document("<hr>") == EXPECTED_HEADER + "<hr>" + EXPECTED_FOOTER


def test_wrap_document_shell_is_single_line():
    document = wrap_document("x")

    assert document == (
        '<!doctype HTML><html><head><link rel="stylesheet" href="styles.css">'
        '</head><body><div id="content">x</div></body></html>'
    )
    assert "\n" not in document


def test_wrap_document_does_not_transform_fragment():
    fragment = "<strong>unclosed & <raw>"
    document = wrap_document(fragment)

    assert document[len(EXPECTED_HEADER) : -len(EXPECTED_FOOTER)] == fragment


def test_wrap_document_uses_custom_stylesheet():
    assert '<link rel="stylesheet" href="site.css">' in wrap_document("", "site.css")


def test_convert_defaults_to_wrapped_document():
    assert convert("*hi*") == EXPECTED_HEADER + "<strong>hi</strong>" + EXPECTED_FOOTER


def test_convert_fragment_only():
    assert convert("# T\n", SiteflonConfig(fragment=True)) == "<h1> T</h1>"


def test_convert_preserve_newlines():
    config = SiteflonConfig(fragment=True, preserve_newlines=True)

    assert convert("a\nb", config) == "a<br>b"


def test_convert_abort_yields_empty_shell():
    assert convert("*x* @[a]b") == EXPECTED_HEADER + EXPECTED_FOOTER


def test_convert_strict_raises():
    with pytest.raises(MalformedConstructError):
        convert("@[a]b", SiteflonConfig(strict=True))


def test_convert_validates_config():
    with pytest.raises(ConfigError):
        convert("text", SiteflonConfig(stylesheet=""))
