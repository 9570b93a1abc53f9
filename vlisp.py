import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

from vlisp_reader import read_lists, read_str, tokenize
from vlisp_printer import dump_tokens, dump_tree, pr_forms
from vlisp_types import VLispList
from vlisp_error import VLispError

logger = logging.getLogger(__name__)

def READ(source: str, strict: bool = True) -> VLispList:
    return read_str(source, strict)

def PRINT(root: VLispList) -> str:
    return pr_forms(root)

def rep(source: str, strict: bool = True) -> str:
    return PRINT(READ(source, strict))

def repl(strict: bool = True) -> None:
    while True:
        try:
            print(rep(input("vlisp> "), strict))
        except VLispError as e:
            print(f"Error: {e}")
        except EOFError:
            break

def dump(source: str, args: argparse.Namespace, out: TextIO) -> None:
    """Read the whole source and print the requested views of it."""
    tokens = tokenize(source)
    root = read_lists(tokens, not args.lenient)
    if args.tokens:
        dump_tokens(tokens, out)
    if args.list:
        dump_tree(root, out)
    if args.forms or not (args.tokens or args.list):
        forms = pr_forms(root)
        if forms:
            out.write(forms + "\n")

def read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")

def debug_from_env() -> bool:
    return os.environ.get("VLISP_DEBUG", "") not in ("", "0")

def main(argv: Optional[list[str]] = None) -> int:
    """Entry point of the vlisp reader command."""
    parser = argparse.ArgumentParser(prog="vlisp", description="read VLisp source and print its tokens and syntax tree")
    parser.add_argument("input", nargs="?", default=None, type=str,
                        help='path to input file, "-" for stdin (default: REPL when stdin is a terminal)')
    parser.add_argument("--tokens", action="store_true", help="print tokens")
    parser.add_argument("--list", action="store_true", help="print raw lists")
    parser.add_argument("--forms", action="store_true", help="print the forms back as source (default)")
    parser.add_argument("--lenient", action="store_true",
                        help="close lists left open at end of input instead of failing")
    parser.add_argument("--verbose", "-v", action="store_true", help="log reader progress to stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s",
                        level=logging.DEBUG if args.verbose or debug_from_env() else logging.WARNING)

    if args.input is None and sys.stdin.isatty():
        repl(not args.lenient)
        return 0

    path = args.input or "-"
    try:
        source = read_source(path)
    except OSError as e:
        print(f"Error: cannot read {path}: {e.strerror}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: cannot decode {path}: {e}", file=sys.stderr)
        return 1
    logger.info(f"read {len(source)} characters from {path}")

    try:
        dump(source, args, sys.stdout)
    except VLispError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
