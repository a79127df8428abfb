"""
siteflon: compiler for the siteflon lightweight markup dialect.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    siteflon index.sf -o index.html

Library Usage:
    from siteflon import compile_markup, wrap_document

    fragment = compile_markup("# Hello\\n*world*", preserve_newlines=True)
    html = wrap_document(fragment)
"""

from .compiler import compile_markup
from .config import ConfigError, SiteflonConfig
from .document import convert, wrap_document
from .exceptions import CompileError, MalformedConstructError
from .models import CompilerContext, OpenState

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "compile_markup",
    "convert",
    "wrap_document",
    # Data models
    "CompilerContext",
    "OpenState",
    "SiteflonConfig",
    # Exceptions
    "CompileError",
    "ConfigError",
    "MalformedConstructError",
    # Version
    "__version__",
]
