import pytest
from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from clam.cli.prompt import PROMPT_STYLE, ManagerCompleter, ModeLexer, to_prompt_completion, to_prompt_style
from clam.completion.integration import CompletionIntegration
from clam.completion.types import Completion, CompletionGroup


def test_lexer_colors_shell_tokens(classifier) -> None:
    fragments = ModeLexer(classifier).lex_line("git status --short")
    assert fragments[0] == ("class:token.command", "git")
    assert ("class:token.option", "--short") in fragments
    assert "".join(text for _, text in fragments) == "git status --short"


def test_prompt_style_follows_token_table() -> None:
    assert to_prompt_style("bold cyan") == "bold ansicyan"
    assert PROMPT_STYLE["token.command"] == "bold"
    assert PROMPT_STYLE["token.option"] == "ansicyan"
    assert "token.argument" not in PROMPT_STYLE


def test_lexer_colors_natural_language_as_one_span(classifier) -> None:
    assert ModeLexer(classifier).lex_line("how do I rebase") == [("class:mode.nl", "how do I rebase")]


def test_lexer_document_lines(classifier) -> None:
    get_line = ModeLexer(classifier).lex_document(Document("/help"))
    assert get_line(0) == [("class:mode.slash", "/help")]
    assert get_line(3) == []


def test_prompt_completion_carries_icon_and_description() -> None:
    item = Completion(
        value="git",
        group=CompletionGroup.RECOMMENDED_COMMAND,
        score=90,
        source="command",
        icon="$",
        description="version control",
    )
    completion = to_prompt_completion(item, -2)
    assert completion.text == "git"
    assert completion.start_position == -2
    assert completion.display_meta_text == "version control"


async def _collect(completer: ManagerCompleter, text: str) -> list:
    return [item async for item in completer.get_completions_async(Document(text), CompleteEvent())]


@pytest.mark.asyncio
async def test_command_completion_replaces_the_typed_word(classifier, tmp_path) -> None:
    integration = CompletionIntegration(classifier=classifier, cwd=str(tmp_path))
    items = await _collect(ManagerCompleter(integration), "gi")
    assert [item.text for item in items] == ["git"]
    assert items[0].start_position == -2


@pytest.mark.asyncio
async def test_slash_completion_replaces_the_whole_line(classifier, tmp_path) -> None:
    integration = CompletionIntegration(classifier=classifier, cwd=str(tmp_path))
    items = await _collect(ManagerCompleter(integration), "/he")
    assert [item.text for item in items] == ["/help"]
    assert items[0].start_position == -3


@pytest.mark.asyncio
async def test_no_completions_for_prose(classifier, tmp_path) -> None:
    integration = CompletionIntegration(classifier=classifier, cwd=str(tmp_path))
    assert await _collect(ManagerCompleter(integration), "explain this please") == []
