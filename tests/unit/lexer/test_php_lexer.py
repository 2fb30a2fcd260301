"""
code-checker — unit tests for the PHP lexer

File: tests/unit/lexer/test_php_lexer.py
Last updated: 2026-10-18

Purpose
- Validate token classification, line tracking, and losslessness of the lexer.

What this test file should cover
- Inline HTML versus code mode switching.
- Comments, quoted strings, heredoc and nowdoc bodies.
- Unterminated constructs and arbitrary input never raise.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from code_checker.lexer import Token, TokenKind, tokenize, untokenize

pytestmark = pytest.mark.unit


def _texts(tokens: list[Token], kind: TokenKind) -> list[str]:
    return [token.text for token in tokens if token.kind is kind]


def test_inline_html_without_open_tag_is_a_single_token() -> None:
    tokens = tokenize("<html><body>/* not a comment */</body></html>\n")

    assert [token.kind for token in tokens] == [TokenKind.OTHER]


def test_code_section_classifies_comments_strings_and_whitespace() -> None:
    source = '<?php // c\n$a = "x"; /* b */ ?>html'

    tokens = tokenize(source)

    assert _texts(tokens, TokenKind.COMMENT) == ["// c", "/* b */"]
    assert _texts(tokens, TokenKind.STRING_LITERAL) == ['"x"']
    assert tokens[0] == Token(TokenKind.OTHER, "<?php", 1)
    assert tokens[-1] == Token(TokenKind.OTHER, "html", 2)
    assert untokenize(tokens) == source


def test_line_comment_stops_before_closing_tag() -> None:
    tokens = tokenize("<?php # note ?><p>'quoted'</p>")

    assert _texts(tokens, TokenKind.COMMENT) == ["# note "]
    assert _texts(tokens, TokenKind.STRING_LITERAL) == []


def test_attribute_syntax_is_not_a_comment() -> None:
    tokens = tokenize("<?php\n#[Attribute]\nclass A {}\n")

    assert _texts(tokens, TokenKind.COMMENT) == []


def test_tokens_carry_their_starting_line() -> None:
    tokens = tokenize('<?php\n\n/* one\ntwo */\n$x = "a\nb"; // end\n')

    comments = [token for token in tokens if token.kind is TokenKind.COMMENT]
    literal = next(token for token in tokens if token.kind is TokenKind.STRING_LITERAL)
    assert [token.line for token in comments] == [3, 6]
    assert literal.line == 5


def test_escaped_quotes_stay_inside_the_literal() -> None:
    tokens = tokenize(r"""<?php $a = 'it\'s'; $b = "say \"hi\"";""")

    assert _texts(tokens, TokenKind.STRING_LITERAL) == [r"'it\'s'", r'"say \"hi\""']


def test_heredoc_body_is_a_literal_after_its_start_token() -> None:
    source = "<?php\n$x = <<<EOT\nhello {$name}\nworld\n  EOT;\n"

    tokens = tokenize(source)

    start_index = next(i for i, t in enumerate(tokens) if t.kind is TokenKind.HEREDOC_START)
    start, body = tokens[start_index], tokens[start_index + 1]
    assert start.text == "<<<EOT\n"
    assert not start.is_nowdoc_start
    assert body == Token(TokenKind.STRING_LITERAL, "hello {$name}\nworld", 3)
    assert untokenize(tokens) == source


def test_nowdoc_start_is_recognized() -> None:
    tokens = tokenize("<?php\n$x = <<<'EOT'\nraw \\q\nEOT;\n")

    start = next(token for token in tokens if token.kind is TokenKind.HEREDOC_START)
    assert start.is_nowdoc_start
    assert _texts(tokens, TokenKind.STRING_LITERAL) == ["raw \\q"]


def test_shift_operator_is_not_a_heredoc() -> None:
    tokens = tokenize("<?php $a = $b <<< 2;")

    assert all(token.kind is not TokenKind.HEREDOC_START for token in tokens)


@pytest.mark.parametrize(
    ("source", "kind"),
    [
        ("<?php /* open", TokenKind.COMMENT),
        ('<?php "open', TokenKind.STRING_LITERAL),
        ("<?php 'open", TokenKind.STRING_LITERAL),
        ("<?php <<<EOT\nbody without end", TokenKind.STRING_LITERAL),
    ],
)
def test_unterminated_constructs_run_to_end_of_input(source: str, kind: TokenKind) -> None:
    tokens = tokenize(source)

    assert tokens[-1].kind is kind
    assert untokenize(tokens) == source


_PHP_ALPHABET = st.sampled_from(
    ["<?php ", "<?=", "?>", "<?", "<<<", "EOT", "'EOT'", "\n", "\r\n", " ", "\t",
     "/*", "*/", "//", "#", "#[", '"', "'", "`", "\\", "$a", "x", "é", "{", "}", ";"]
)


@settings(max_examples=300, deadline=None)
@given(st.lists(_PHP_ALPHABET, max_size=60).map("".join))
def test_tokenize_is_lossless_for_arbitrary_input(source: str) -> None:
    tokens = tokenize(source)

    assert untokenize(tokens) == source
    offset = 0
    for token in tokens:
        assert token.text
        assert token.line == source.count("\n", 0, offset) + 1
        offset += len(token.text)


@settings(max_examples=200, deadline=None)
@given(st.text(max_size=200))
def test_tokenize_never_raises_on_unicode_text(source: str) -> None:
    assert untokenize(tokenize(source)) == source
