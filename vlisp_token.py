import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class TokenKind(Enum):
    NAME = "NAME"
    STRING = "STRING"
    LP = "LP"
    RP = "RP"
    I32 = "I32"
    F32 = "F32"

ATOM_KINDS = frozenset({TokenKind.NAME, TokenKind.STRING, TokenKind.I32, TokenKind.F32})
NUMERIC_KINDS = frozenset({TokenKind.I32, TokenKind.F32})

@dataclass(eq=False)
class VLispToken:
    kind: TokenKind
    source: str = field(repr=False)
    start: int = -1
    end: int = -1
    numeric_value: Optional[Union[int, float]] = None

    @property
    def text(self) -> str:
        return self.source[self.start:self.end]

    def is_atom(self) -> bool:
        return self.kind in ATOM_KINDS

    def payload(self):
        if self.kind in NUMERIC_KINDS:
            # NaN never equals itself
            if self.kind == TokenKind.F32 and math.isnan(self.numeric_value):
                return "nan"
            return self.numeric_value
        if self.kind in (TokenKind.LP, TokenKind.RP):
            return None
        return self.text

    def __eq__(self, other):
        if isinstance(other, VLispToken):
            return self.kind == other.kind and self.payload() == other.payload()
        return False

    def __hash__(self) -> int:
        return hash((self.kind, self.payload()))

    def __str__(self):
        if self.kind in NUMERIC_KINDS:
            return str(self.numeric_value)
        return self.text
