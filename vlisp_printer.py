import math
from typing import Iterable, TextIO, Union

from vlisp_types import SyntaxNode, VLispAtom, VLispList
from vlisp_token import TokenKind, VLispToken


def token_str(token: VLispToken) -> str:
    """Diagnostic rendering of a single token, e.g. ``[NAME foo]`` or ``[F32 3.500000]``."""
    match token.kind:
        case TokenKind.LP | TokenKind.RP:
            return f"[{token.kind.value}]"
        case TokenKind.STRING:
            return f"[STRING \"{token.text}\"]"
        case TokenKind.I32:
            return f"[I32 {token.numeric_value}]"
        case TokenKind.F32:
            return f"[F32 {token.numeric_value:f}]"
        case _:
            return f"[NAME {token.text}]"

def dump_str(node: SyntaxNode) -> str:
    """Diagnostic rendering of a tree: ``( *[NAME a] ( *[NAME b] ) )``."""
    # Work stack of nodes and literal text, popped in output order
    parts: list[str] = []
    stack: list[Union[SyntaxNode, str]] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, VLispAtom):
            parts.append(f"*{token_str(item.token)}")
        else:
            parts.append("( ")
            stack.append(")")
            for child in reversed(item.elements):
                stack.append(" ")
                stack.append(child)
    return "".join(parts)

def dump_tokens(tokens: Iterable[VLispToken], out: TextIO) -> None:
    for token in tokens:
        out.write(f"{token_str(token)} ")
    out.write("\n")

def dump_tree(root: VLispList, out: TextIO) -> None:
    out.write(dump_str(root))
    out.write("\n")

def atom_str(token: VLispToken) -> str:
    match token.kind:
        case TokenKind.STRING:
            return f"\"{token.text}\""
        case TokenKind.I32:
            return f"{token.numeric_value}i32"
        case TokenKind.F32:
            value = token.numeric_value
            if math.isnan(value):
                return "nanf32"
            return f"{value!r}f32"
        case _:
            return token.text

def pr_str(node: SyntaxNode) -> str:
    """Render a node back to source text that reads to an equal tree."""
    parts: list[str] = []
    stack: list[Union[SyntaxNode, str]] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, VLispAtom):
            parts.append(atom_str(item.token))
        else:
            parts.append("(")
            stack.append(")")
            for index in range(item.size - 1, -1, -1):
                stack.append(item.elements[index])
                if index:
                    stack.append(" ")
    return "".join(parts)

def pr_forms(root: VLispList) -> str:
    return "\n".join(pr_str(form) for form in root.elements)
