#!/usr/bin/env python
import argparse
from pathlib import Path

from vmfforge.lexer import Lexer, NameRule, Token, token_text


def format_token(idx: int, token: Token, source: str) -> str:
    base = (
        f"[{idx}] kind={token.kind.name} "
        f"text={token_text(source, token)!r} "
        f"span=({token.range.start.value},{token.range.end.value})"
    )
    if token.unterminated:
        return base + " unterminated"
    return base


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump the VMF lexer token stream of a file")
    parser.add_argument("input", type=Path, help="VMF file to tokenize")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write tokens here instead of out/<input stem>_tokens.txt",
    )
    parser.add_argument("--loose-names", action="store_true", help="Accept punctuation in block names")
    args = parser.parse_args()

    input_path: Path = args.input
    output_path: Path = args.output or Path("out") / f"{input_path.stem}_tokens.txt"

    text = input_path.read_text(encoding="utf-8")

    lexer = Lexer(text, name_rule=NameRule.LOOSE if args.loose_names else NameRule.STRICT)
    tokens = lexer.lex()

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", encoding="utf-8") as f:
        for idx, token in enumerate(tokens):
            f.write(format_token(idx, token, text) + "\n")
        for diagnostic in lexer.diagnostics:
            f.write(f"! {diagnostic.code} {diagnostic.message} at {diagnostic.range.as_tuple()}\n")

    print(f"Wrote {len(tokens)} tokens to {output_path}")


if __name__ == "__main__":
    main()
