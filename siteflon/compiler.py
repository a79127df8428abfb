"""Single-pass compiler from siteflon markup to HTML."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial

from .constants import (
    DIMENSION_SEPARATOR,
    LABEL_CLOSE,
    LABEL_OPEN,
    MARKERS,
    MAX_HEADING_LEVEL,
    RULE_LENGTH,
    TARGET_CLOSE,
    TARGET_OPEN,
)
from .exceptions import MalformedConstructError
from .models import CompilerContext, ImageLabel, OpenState

TOGGLE_TAGS = {
    OpenState.BOLD: ("<strong>", "</strong>"),
    OpenState.ITALICS: ("<em>", "</em>"),
    OpenState.UNDERLINE: ("<u>", "</u>"),
}


def _peek(ctx: CompilerContext, offset: int = 0) -> str | None:
    """Return the character `offset` places past the cursor, or None past the end."""
    position = ctx.cursor + offset
    if position < len(ctx.source):
        return ctx.source[position]
    return None


def _emit(ctx: CompilerContext, *pieces: str) -> None:
    ctx.output.extend(pieces)


def _copy_verbatim(ctx: CompilerContext, terminator: str) -> None:
    """Copy characters up to an unescaped `terminator`, consuming it.

    A backslash emits the following character without the backslash. The copy
    runs to the end of the source when no terminator is found.
    """
    escape = MARKERS["escape"]
    while not ctx.at_end:
        char = ctx.source[ctx.cursor]
        ctx.cursor += 1
        if char == terminator:
            return
        if char == escape:
            char = _peek(ctx)
            if char is None:
                return
            ctx.cursor += 1
        _emit(ctx, char)


def _handle_escape(ctx: CompilerContext) -> None:
    ctx.cursor += 1
    char = _peek(ctx)
    if char is not None:
        _emit(ctx, char)
        ctx.cursor += 1


def _handle_raw(ctx: CompilerContext) -> None:
    ctx.cursor += 1
    _copy_verbatim(ctx, MARKERS["raw_end"])


def _handle_code(ctx: CompilerContext) -> None:
    ctx.cursor += 1
    _emit(ctx, "<pre>")
    _copy_verbatim(ctx, MARKERS["code"])
    _emit(ctx, "</pre>")


def _handle_toggle(state: OpenState, ctx: CompilerContext) -> None:
    """Close `state` when it is on top of the stack, otherwise open it.

    Only the top of the stack is checked, so ``*_x*_`` yields mismatched tags.
    """
    open_tag, close_tag = TOGGLE_TAGS[state]
    if ctx.top_state is state:
        ctx.open_states.pop()
        _emit(ctx, close_tag)
    else:
        ctx.open_states.append(state)
        _emit(ctx, open_tag)
    ctx.cursor += 1


def _handle_rule(ctx: CompilerContext) -> None:
    rule = MARKERS["rule"]
    is_rule = not ctx.open_states and all(
        _peek(ctx, offset) == rule for offset in range(1, RULE_LENGTH)
    )
    if is_rule:
        _emit(ctx, "<hr>")
        ctx.cursor += RULE_LENGTH
    else:
        _emit(ctx, rule)
        ctx.cursor += 1


def _handle_line_break(ctx: CompilerContext) -> None:
    line_break = MARKERS["line_break"]
    if _peek(ctx, 1) == line_break:
        _emit(ctx, "<br>")
        ctx.cursor += 2
    else:
        _emit(ctx, line_break)
        ctx.cursor += 1


def _handle_heading(ctx: CompilerContext) -> None:
    """Open a heading whose level is the length of the ``#`` run.

    At most `MAX_HEADING_LEVEL` markers are consumed; any further ``#`` opens
    another heading.
    """
    level = 0
    while level < MAX_HEADING_LEVEL and _peek(ctx) == MARKERS["heading"]:
        level += 1
        ctx.cursor += 1
    ctx.open_states.append(OpenState.HEADING)
    ctx.heading_levels.append(level)
    _emit(ctx, f"<h{level}>")


def _handle_newline(ctx: CompilerContext) -> None:
    # A newline that closes a heading is consumed by the closing tag
    if ctx.top_state is OpenState.HEADING:
        ctx.open_states.pop()
        _emit(ctx, f"</h{ctx.heading_levels.pop()}>")
    elif ctx.preserve_newlines:
        _emit(ctx, "<br>")
    else:
        _emit(ctx, MARKERS["newline"])
    ctx.cursor += 1


def _scan_label(ctx: CompilerContext) -> str:
    """Collect characters up to the closing ``]``, consuming it."""
    chars = []
    while not ctx.at_end:
        char = ctx.source[ctx.cursor]
        ctx.cursor += 1
        if char == LABEL_CLOSE:
            break
        chars.append(char)
    return "".join(chars)


def _scan_image_label(ctx: CompilerContext) -> ImageLabel:
    """Collect ``alt::width::height`` up to the closing ``]``, consuming it.

    Both separators are optional; ``::`` has no meaning inside the height.

    Examples:
        ``[logo]`` -> ImageLabel(alt="logo")
        ``[logo::100::50]`` -> ImageLabel(alt="logo", width="100", height="50")
    """
    fields: list[list[str]] = [[], [], []]
    index = 0
    while not ctx.at_end:
        char = ctx.source[ctx.cursor]
        if char == LABEL_CLOSE:
            ctx.cursor += 1
            break
        if index < 2 and char == DIMENSION_SEPARATOR and _peek(ctx, 1) == DIMENSION_SEPARATOR:
            index += 1
            ctx.cursor += 2
            continue
        fields[index].append(char)
        ctx.cursor += 1
    alt, width, height = ("".join(chars) for chars in fields)
    return ImageLabel(alt=alt, width=width, height=height)


def _scan_target(ctx: CompilerContext, construct: str, marker_position: int) -> str:
    """Collect a parenthesised target, balancing nested parentheses.

    Args:
        ctx: Compiler context positioned just after the label.
        construct: ``"link"`` or ``"image"``, used in error reporting.
        marker_position: Offset of the ``@`` or ``!`` that opened the construct.

    Returns:
        str: Target text without the enclosing parentheses. An unterminated
            target runs to the end of the source.

    Raises:
        MalformedConstructError: If the label is not followed by ``(``.
    """
    if _peek(ctx) != TARGET_OPEN:
        raise MalformedConstructError(construct, marker_position)
    ctx.cursor += 1

    depth = 0
    chars = []
    while not ctx.at_end:
        char = ctx.source[ctx.cursor]
        ctx.cursor += 1
        if char == TARGET_CLOSE:
            if depth == 0:
                break
            depth -= 1
        elif char == TARGET_OPEN:
            depth += 1
        chars.append(char)
    return "".join(chars)


def _handle_link(ctx: CompilerContext) -> None:
    """Compile ``@[label](target)`` into an anchor.

    An ``@`` that is not followed by ``[`` is dropped and the next character
    is compiled normally.
    """
    marker_position = ctx.cursor
    ctx.cursor += 1
    if _peek(ctx) != LABEL_OPEN:
        return
    ctx.cursor += 1

    label = _scan_label(ctx)
    target = _scan_target(ctx, "link", marker_position)
    _emit(ctx, '\n<a href="', target, '">', label or target, "</a>\n")


def _handle_image(ctx: CompilerContext) -> None:
    """Compile ``![alt::width::height](target)`` into an ``img`` tag."""
    marker_position = ctx.cursor
    ctx.cursor += 1
    if _peek(ctx) != LABEL_OPEN:
        return
    ctx.cursor += 1

    label = _scan_image_label(ctx)
    target = _scan_target(ctx, "image", marker_position)
    _emit(ctx, '\n<img src="', target, '" alt="', label.alt or target, '"')
    if label.width:
        _emit(ctx, ' width="', label.width, '"')
    if label.height:
        _emit(ctx, ' height="', label.height, '"')
    _emit(ctx, ">\n")


_HANDLERS: dict[str, Callable[[CompilerContext], None]] = {
    MARKERS["escape"]: _handle_escape,
    MARKERS["raw_begin"]: _handle_raw,
    MARKERS["bold"]: partial(_handle_toggle, OpenState.BOLD),
    MARKERS["italics"]: partial(_handle_toggle, OpenState.ITALICS),
    MARKERS["underline"]: partial(_handle_toggle, OpenState.UNDERLINE),
    MARKERS["rule"]: _handle_rule,
    MARKERS["line_break"]: _handle_line_break,
    MARKERS["heading"]: _handle_heading,
    MARKERS["newline"]: _handle_newline,
    MARKERS["link"]: _handle_link,
    MARKERS["image"]: _handle_image,
    MARKERS["code"]: _handle_code,
}


def run_compiler(ctx: CompilerContext) -> str:
    """Drive `ctx` to the end of its source and return the emitted HTML.

    Constructs still open at the end of the source are left unclosed.

    Args:
        ctx: Fresh compiler context.

    Returns:
        str: Compiled HTML fragment.

    Raises:
        MalformedConstructError: If a link or image label is not followed by
            its target.
    """
    while not ctx.at_end:
        char = ctx.source[ctx.cursor]
        handler = _HANDLERS.get(char)
        if handler is None:
            _emit(ctx, char)
            ctx.cursor += 1
        else:
            handler(ctx)
    return "".join(ctx.output)


def compile_markup(source: str, preserve_newlines: bool = False, *, strict: bool = False) -> str:
    """Compile siteflon markup into an HTML fragment.

    Each call works on its own `CompilerContext`, so compilations never share
    state. A link or image whose label is not followed by ``(`` discards the
    whole document.

    Args:
        source: Markup to compile.
        preserve_newlines: Render bare newlines as ``<br>`` instead of passing
            them through.
        strict: Raise instead of returning an empty string when the document
            is discarded.

    Returns:
        str: The HTML fragment, or an empty string when a malformed link or
            image aborted the compilation.

    Raises:
        MalformedConstructError: Only when `strict` is True.

    Examples:
        compile_markup("*bold*")  # "<strong>bold</strong>"
        compile_markup("# Title\\n")  # "<h1> Title</h1>"
        compile_markup("@[text]oops")  # ""
    """
    ctx = CompilerContext(source=source, preserve_newlines=preserve_newlines)
    try:
        return run_compiler(ctx)
    except MalformedConstructError:
        if strict:
            raise
        return ""
