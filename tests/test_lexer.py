import pytest

from tests._debug import debug_dump_tokens
from tests._shared_cases import PARSER_CASES, VmfCase
from vmfforge.lexer import Lexer, NameRule, TokenKind, string_content, token_text


def lex(text: str, *, name_rule: NameRule = NameRule.STRICT):
    return Lexer(text, name_rule=name_rule).lex()


def kinds(text: str, *, name_rule: NameRule = NameRule.STRICT) -> list[TokenKind]:
    return [token.kind for token in lex(text, name_rule=name_rule)]


def test_block_with_key_value_token_stream() -> None:
    source = 'world\n{\n"id" "1"\n}'
    tokens = lex(source)
    debug_dump_tokens("block_with_key_value", source, tokens)

    assert [token.kind for token in tokens] == [
        TokenKind.NAME,
        TokenKind.NEWLINE,
        TokenKind.LBRACE,
        TokenKind.NEWLINE,
        TokenKind.STRING,
        TokenKind.WHITESPACE,
        TokenKind.STRING,
        TokenKind.NEWLINE,
        TokenKind.RBRACE,
        TokenKind.EOF,
    ]
    assert tokens[0].range.as_tuple() == (0, 5)
    assert token_text(source, tokens[4]) == '"id"'
    assert tokens[4].range.as_tuple() == (8, 12)
    assert token_text(source, tokens[6]) == '"1"'
    assert tokens[-1].range.is_empty()


@pytest.mark.parametrize("case", PARSER_CASES, ids=lambda case: case.name)
@pytest.mark.parametrize("name_rule", [NameRule.STRICT, NameRule.LOOSE])
def test_tokens_cover_source_losslessly(case: VmfCase, name_rule: NameRule) -> None:
    tokens = lex(case.source, name_rule=name_rule)

    assert "".join(token_text(case.source, token) for token in tokens) == case.source
    assert tokens[-1].kind == TokenKind.EOF


def test_string_has_no_escapes_and_may_span_lines() -> None:
    source = '"C:\\maps\\" "a\nb"'
    tokens = lex(source)

    assert [token.kind for token in tokens] == [
        TokenKind.STRING,
        TokenKind.WHITESPACE,
        TokenKind.STRING,
        TokenKind.EOF,
    ]
    assert token_text(source, tokens[0]) == '"C:\\maps\\"'
    assert token_text(source, tokens[2]) == '"a\nb"'


def test_unterminated_string_runs_to_end_of_input() -> None:
    lexer = Lexer('"id" "abc\n}\n')
    tokens = lexer.lex()

    assert [token.kind for token in tokens] == [
        TokenKind.STRING,
        TokenKind.WHITESPACE,
        TokenKind.STRING,
        TokenKind.EOF,
    ]
    assert tokens[2].range.as_tuple() == (5, 12)
    assert tokens[2].unterminated
    assert not tokens[0].unterminated

    assert len(lexer.diagnostics) == 1
    diagnostic = lexer.diagnostics[0]
    assert diagnostic.code == "LEXER_UNTERMINATED_STRING"
    assert diagnostic.range.start.value == 5


def test_strict_names_reject_punctuation() -> None:
    lexer = Lexer("my-block")
    tokens = lexer.lex()

    assert [token.kind for token in tokens] == [
        TokenKind.NAME,
        TokenKind.SKIPPED,
        TokenKind.NAME,
        TokenKind.EOF,
    ]
    assert len(lexer.diagnostics) == 1
    assert lexer.diagnostics[0].code == "LEXER_INVALID_CHARACTER"
    assert lexer.diagnostics[0].range.as_tuple() == (2, 3)
    assert lexer.diagnostics[0].message == "Unexpected character '-'"


def test_strict_names_are_ascii_only() -> None:
    assert kinds("blöck") == [TokenKind.NAME, TokenKind.SKIPPED, TokenKind.NAME, TokenKind.EOF]


def test_loose_names_accept_punctuation_until_brace_or_quote() -> None:
    source = 'my-block.v2{"a"'
    tokens = lex(source, name_rule=NameRule.LOOSE)

    assert [token.kind for token in tokens] == [
        TokenKind.NAME,
        TokenKind.LBRACE,
        TokenKind.STRING,
        TokenKind.EOF,
    ]
    assert token_text(source, tokens[0]) == "my-block.v2"


@pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
def test_each_line_ending_is_one_newline_token(newline: str) -> None:
    source = f"a{newline}b"
    tokens = lex(source)

    assert [token.kind for token in tokens] == [
        TokenKind.NAME,
        TokenKind.NEWLINE,
        TokenKind.NAME,
        TokenKind.EOF,
    ]
    assert token_text(source, tokens[1]) == newline


def test_whitespace_run_is_one_token() -> None:
    source = "a \t \tb"
    tokens = lex(source)

    assert tokens[1].kind == TokenKind.WHITESPACE
    assert token_text(source, tokens[1]) == " \t \t"


def test_next_token_keeps_returning_eof_when_exhausted() -> None:
    lexer = Lexer("a")
    lexer.next_token()

    first = lexer.next_token()
    second = lexer.next_token()

    assert first.kind == second.kind == TokenKind.EOF
    assert first.range.as_tuple() == second.range.as_tuple() == (1, 1)
    assert lexer.position == 1


def test_form_feed_is_skipped_in_both_name_rules() -> None:
    assert kinds("a\fb") == [TokenKind.NAME, TokenKind.SKIPPED, TokenKind.NAME, TokenKind.EOF]
    assert kinds("a\fb", name_rule=NameRule.LOOSE) == [
        TokenKind.NAME,
        TokenKind.SKIPPED,
        TokenKind.NAME,
        TokenKind.EOF,
    ]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ('"abc"', "abc"),
        ('""', ""),
        ('"unterminated', "unterminated"),
    ],
)
def test_string_content_strips_delimiting_quotes(text: str, expected: str) -> None:
    assert string_content(text) == expected
