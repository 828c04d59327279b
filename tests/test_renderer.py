from clam.input.parser import update_input_state_with_tokens
from clam.input.renderer import render_input, render_line
from clam.input.state import create_input_state
from clam.types import Mode


def test_render_colors_tokens_without_changing_text() -> None:
    state = update_input_state_with_tokens(create_input_state("git log -n 3 | less", 0, Mode.SHELL, "/"))
    rendered = render_input(state)
    assert "\x1b[" in rendered
    assert "\x1b[1mgit\x1b[0m" in rendered
    for fragment in ("git", "log", "-n", "less"):
        assert fragment in rendered


def test_render_untokenized_state_is_plain() -> None:
    state = create_input_state("hello", 0, Mode.NATURAL_LANGUAGE, "/")
    assert render_input(state) == "hello"


def test_render_line_tokenizes_text() -> None:
    rendered = render_line("ls -la")
    assert "\x1b[1mls\x1b[0m" in rendered
    assert "\x1b[36m-la\x1b[0m" in rendered
