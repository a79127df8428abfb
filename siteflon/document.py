"""HTML document shell around compiled fragments."""

from __future__ import annotations

from .compiler import compile_markup
from .config import SiteflonConfig, validate_config
from .constants import DEFAULT_STYLESHEET, DOCUMENT_FOOTER, DOCUMENT_HEADER_TEMPLATE


def wrap_document(fragment: str, stylesheet: str = DEFAULT_STYLESHEET) -> str:
    """Place a compiled fragment inside the fixed document shell.

    The fragment is inserted as-is.

    Args:
        fragment: Compiled HTML fragment.
        stylesheet: Href of the stylesheet linked from the document head.

    Returns:
        str: Complete HTML document.

    Examples:
        wrap_document("<strong>hi</strong>")
    """
    return DOCUMENT_HEADER_TEMPLATE.format(stylesheet=stylesheet) + fragment + DOCUMENT_FOOTER


def convert(source: str, config: SiteflonConfig | None = None) -> str:
    """Compile markup and wrap it according to `config`.

    Args:
        source: Markup to compile.
        config: Compilation and output settings. Defaults to a new
            `SiteflonConfig` when omitted.

    Returns:
        str: Complete HTML document, or the bare fragment when
            `config.fragment` is set.

    Raises:
        ConfigError: If the configuration fails validation.
        MalformedConstructError: If `config.strict` is set and a link or image
            is malformed.

    Examples:
        convert("# Title\\n", SiteflonConfig(stylesheet="site.css"))
    """
    config = config or SiteflonConfig()
    validate_config(config)

    fragment = compile_markup(source, config.preserve_newlines, strict=config.strict)
    if config.fragment:
        return fragment
    return wrap_document(fragment, config.stylesheet)
