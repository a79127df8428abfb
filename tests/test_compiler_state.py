from siteflon.compiler import (
    _handle_heading,
    _handle_newline,
    _handle_rule,
    _handle_toggle,
    _peek,
    _scan_image_label,
    _scan_target,
    run_compiler,
)
from siteflon.models import CompilerContext, ImageLabel, OpenState


def test_peek_returns_none_past_end():
    ctx = CompilerContext(source="ab", cursor=1)

    assert _peek(ctx) == "b"
    assert _peek(ctx, 1) is None
    assert _peek(ctx, 5) is None


def test_toggle_pushes_then_pops():
    ctx = CompilerContext(source="**")

    _handle_toggle(OpenState.BOLD, ctx)
    assert ctx.open_states == [OpenState.BOLD]
    assert ctx.cursor == 1

    _handle_toggle(OpenState.BOLD, ctx)
    assert ctx.open_states == []
    assert ctx.output == ["<strong>", "</strong>"]


def test_toggle_ignores_matching_state_below_top():
    ctx = CompilerContext(source="*", open_states=[OpenState.BOLD, OpenState.ITALICS])

    _handle_toggle(OpenState.BOLD, ctx)

    assert ctx.open_states == [OpenState.BOLD, OpenState.ITALICS, OpenState.BOLD]
    assert ctx.output == ["<strong>"]


def test_heading_scan_stops_before_first_non_marker():
    ctx = CompilerContext(source="### x")

    _handle_heading(ctx)

    assert ctx.cursor == 3
    assert ctx.open_states == [OpenState.HEADING]
    assert ctx.heading_levels == [3]
    assert ctx.output == ["<h3>"]


def test_heading_scan_consumes_at_most_six_markers():
    ctx = CompilerContext(source="########")

    _handle_heading(ctx)

    assert ctx.cursor == 6
    assert ctx.heading_levels == [6]


def test_newline_closes_heading_with_recorded_level():
    ctx = CompilerContext(
        source="\n", open_states=[OpenState.HEADING], heading_levels=[4]
    )

    _handle_newline(ctx)

    assert ctx.open_states == []
    assert ctx.heading_levels == []
    assert ctx.output == ["</h4>"]
    assert ctx.at_end


def test_nested_headings_close_with_their_own_levels():
    ctx = CompilerContext(source="## a # b\n\n")

    assert run_compiler(ctx) == "<h2> a <h1> b</h1></h2>"


def test_rule_requires_empty_stack():
    ctx = CompilerContext(source="---", open_states=[OpenState.UNDERLINE])

    _handle_rule(ctx)

    assert ctx.output == ["-"]
    assert ctx.cursor == 1


def test_rule_consumes_three_dashes():
    ctx = CompilerContext(source="---x")

    _handle_rule(ctx)

    assert ctx.output == ["<hr>"]
    assert ctx.cursor == 3


def test_scan_target_stops_after_balanced_close():
    ctx = CompilerContext(source="(a(b)c)rest")

    assert _scan_target(ctx, "link", 0) == "a(b)c"
    assert ctx.source[ctx.cursor :] == "rest"


def test_scan_image_label_splits_dimensions():
    ctx = CompilerContext(source="alt::10::20]x")

    assert _scan_image_label(ctx) == ImageLabel(alt="alt", width="10", height="20")
    assert ctx.source[ctx.cursor :] == "x"


def test_scan_image_label_width_ends_at_bracket():
    ctx = CompilerContext(source="alt::10](src)")

    assert _scan_image_label(ctx) == ImageLabel(alt="alt", width="10")
    assert _peek(ctx) == "("


def test_scan_image_label_keeps_separators_in_height():
    ctx = CompilerContext(source="a::1::2::3]")

    assert _scan_image_label(ctx) == ImageLabel(alt="a", width="1", height="2::3")
