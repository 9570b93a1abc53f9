import random

import pytest

from vlisp_types import SyntaxNode, VLispAtom, VLispList
from vlisp_token import TokenKind, VLispToken

NAMES = ["a", "print", "define", "x1", "+", "-", "<=", "i32", "f32", "42i3", "foo-bar"]
STRINGS = ["", "hi", "bar baz", "(not a list)", "tab\there", "line\nbreak"]
WHITESPACE = [" ", "  ", "\t", "\n", "\r\n"]


def make_atom(kind: TokenKind, text: str, value=None) -> VLispAtom:
    return VLispAtom(VLispToken(kind, text, 0, len(text), value))

def name(text: str) -> VLispAtom:
    return make_atom(TokenKind.NAME, text)

def string(text: str) -> VLispAtom:
    return make_atom(TokenKind.STRING, text)

def i32(value: int) -> VLispAtom:
    return make_atom(TokenKind.I32, f"{value}i32", value)

def f32(value: float) -> VLispAtom:
    return make_atom(TokenKind.F32, f"{value}f32", value)

def lst(*elements: SyntaxNode) -> VLispList:
    return VLispList(elements)


class FormGenerator:
    """Builds random well-formed sources together with the tree they should read to."""

    def __init__(self, seed: int):
        self.rng = random.Random(seed)

    def space(self) -> str:
        return self.rng.choice(WHITESPACE)

    def atom(self) -> tuple[str, SyntaxNode]:
        match self.rng.randrange(4):
            case 0:
                text = self.rng.choice(NAMES)
                return text, name(text)
            case 1:
                text = self.rng.choice(STRINGS)
                return f"\"{text}\"", string(text)
            case 2:
                value = self.rng.randint(-2 ** 31, 2 ** 31 - 1)
                return f"{value}i32", i32(value)
            case _:
                value = self.rng.choice([0.0, 0.5, -2.25, 1024.0, 3.5])
                return f"{value}f32", f32(value)

    def form(self, depth: int) -> tuple[str, SyntaxNode]:
        if depth <= 0 or self.rng.random() < 0.4:
            return self.atom()
        parts = [self.form(depth - 1) for _ in range(self.rng.randrange(5))]
        source = "(" + self.space().join(text for text, _ in parts) + ")"
        return source, VLispList(tuple(node for _, node in parts))

    def program(self) -> tuple[str, VLispList]:
        forms = [self.form(4) for _ in range(self.rng.randrange(1, 6))]
        source = self.space().join(text for text, _ in forms)
        return source, VLispList(tuple(node for _, node in forms))


@pytest.fixture(params=range(20))
def generated_program(request) -> tuple[str, VLispList]:
    return FormGenerator(request.param).program()
