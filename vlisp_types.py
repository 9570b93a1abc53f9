from abc import ABC
from typing import Iterator

from vlisp_token import VLispToken


class SyntaxNode(ABC):
    start: int
    end: int

    def __init__(self, start: int = -1, end: int = -1):
        self.start = start
        self.end = end

class VLispList(SyntaxNode):
    elements: tuple[SyntaxNode, ...]
    size: int

    def __init__(self, elements: tuple[SyntaxNode, ...] = (), start: int = -1, end: int = -1):
        super().__init__(start, end)
        self.elements = tuple(elements)
        self.size = len(self.elements)

    def __iter__(self) -> Iterator[SyntaxNode]:
        return iter(self.elements)

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> SyntaxNode:
        return self.elements[index]

    def __eq__(self, other):
        if not isinstance(other, VLispList):
            return False
        # Paired walk over both trees; deep nesting must not recurse
        stack: list[tuple[SyntaxNode, SyntaxNode]] = [(self, other)]
        while stack:
            left, right = stack.pop()
            if isinstance(left, VLispList):
                if not isinstance(right, VLispList) or left.size != right.size:
                    return False
                stack.extend(zip(left.elements, right.elements))
            elif left != right:
                return False
        return True

    def __hash__(self) -> int:
        # Pre-order sizes and atom hashes fix the shape
        parts: list[int] = []
        stack: list[SyntaxNode] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, VLispList):
                parts.append(node.size)
                stack.extend(reversed(node.elements))
            else:
                parts.append(hash(node))
        return hash(tuple(parts))

    def __repr__(self):
        return f"VLispList({list(self.elements)!r})"

class VLispAtom(SyntaxNode):
    token: VLispToken

    def __init__(self, token: VLispToken):
        if not token.is_atom():
            raise ValueError(f"{token.kind.name} token cannot be an atom")
        super().__init__(token.start, token.end)
        self.token = token

    @property
    def kind(self):
        return self.token.kind

    @property
    def value(self):
        return self.token.payload()

    def __eq__(self, other):
        if isinstance(other, VLispAtom):
            return self.token == other.token
        return False

    def __hash__(self) -> int:
        return hash(self.token)

    def __repr__(self):
        return f"VLispAtom({self.token.kind.name} {self.token})"
