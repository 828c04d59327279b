import pytest

from clam.core.rules import (
    DETECTION_RULES,
    apply_rules,
    has_shell_operators,
    is_all_nl_words,
    looks_like_nl,
    looks_like_question,
    looks_like_request,
)
from clam.types import Mode


def test_rule_table_shape() -> None:
    names = [rule.name for rule in DETECTION_RULES]
    assert len(names) == len(set(names))
    assert names[0] == "empty"
    assert names[-1] == "fallback-nl"
    assert DETECTION_RULES[-1].definitive


@pytest.mark.parametrize(
    ("text", "rule"),
    [
        ("", "empty"),
        ("?ls", "explicit-nl"),
        ("!ls", "explicit-shell"),
        (" ls", "space-at-start"),
        ("/help", "known-slash-command"),
        ("/usr/local/bin/thing", "absolute-path"),
        ("/what", "unknown-slash"),
        ("cat x > y", "shell-operators"),
        ("echo $PATH", "env-variables"),
        ("cd /tmp", "shell-builtin"),
        ("man", "single-prompt-ambiguous"),
        ("thanks", "all-nl-words"),
        ("how do rebases work", "question-sentence"),
        ("could we rename it later", "request-sentence"),
        ("watch", "ambiguous-command-with-nl"),
        ("summarize recent changes here", "structural-nl"),
        ("grep foo", "command-like"),
        ("~~~", "fallback-nl"),
    ],
)
def test_first_matching_rule(text: str, rule: str) -> None:
    assert apply_rules(text).rule == rule


def test_command_exists_only_answers_with_oracle() -> None:
    assert apply_rules("grep foo").mode is Mode.SHELL
    assert apply_rules("grep foo", known=True).rule == "command-exists"
    assert apply_rules("grep foo", known=False).mode is Mode.INVALID


def test_unknown_command_followed_by_nl_word() -> None:
    detection = apply_rules("explain it", known=False)
    assert detection.rule == "unknown-command-with-nl"
    assert detection.mode is Mode.NATURAL_LANGUAGE


def test_known_command_followed_by_nl_word_is_shell() -> None:
    assert apply_rules("git it", known=True).mode is Mode.SHELL


def test_shell_operator_detection() -> None:
    for text in ("a | b", "a > b", "a < b", "a; b", "a && b", "a || b", "echo $(date)", "echo `date`"):
        assert has_shell_operators(text), text
    assert not has_shell_operators("just words here")


def test_word_helpers() -> None:
    assert is_all_nl_words("Thanks!")
    assert not is_all_nl_words("")
    assert looks_like_question("what", "what")
    assert not looks_like_question("who", "who")
    assert looks_like_question("who are you", "who")
    assert looks_like_request("can you do it")
    assert not looks_like_request("please")
    assert looks_like_request("please commit")


def test_structural_nl_rejects_flags_and_short_words() -> None:
    assert looks_like_nl("rewrite this function, please.")
    assert not looks_like_nl("tar -xzf archive")
    assert not looks_like_nl("a b c")
    assert not looks_like_nl("two words")
