import logging
import math
import re
import struct
from typing import Optional

from vlisp_types import SyntaxNode, VLispAtom, VLispList
from vlisp_token import TokenKind, VLispToken
from vlisp_error import (MalformedNumericSuffixError, UnbalancedCloseParenError,
                         UnbalancedOpenParenError, UnterminatedStringLiteralError)

logger = logging.getLogger(__name__)

F32_SUFFIX = "f32"
I32_SUFFIX = "i32"

I32_MIN = -2 ** 31
I32_MAX = 2 ** 31 - 1

# The literal syntax accepted by C's strtof/strtol, anchored on both ends.
# A hex float needs its p exponent, otherwise strtof reads the f32 suffix as hex digits.
f32_decimal_re = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
f32_hex_re = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")
f32_special_re = re.compile(r"[+-]?(?:inf(?:inity)?|nan)", re.IGNORECASE)
i32_re = re.compile(r"[+-]?[0-9]+")

def to_float32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)

def parse_f32(text: str) -> Optional[float]:
    if f32_decimal_re.fullmatch(text) or f32_special_re.fullmatch(text):
        return to_float32(float(text))
    if f32_hex_re.fullmatch(text):
        return to_float32(float.fromhex(text))
    return None

def parse_i32(text: str) -> Optional[int]:
    if i32_re.fullmatch(text):
        return int(text)
    return None

def read_atom(source: str, start: int, end: int) -> VLispToken:
    text = source[start:end]

    # A bare suffix is the type name itself
    if text in (F32_SUFFIX, I32_SUFFIX):
        return VLispToken(TokenKind.NAME, source, start, end)

    if text.endswith(F32_SUFFIX):
        value = parse_f32(text[:-len(F32_SUFFIX)])
        if value is None:
            raise MalformedNumericSuffixError("Invalid f32 literal", text, start)
        return VLispToken(TokenKind.F32, source, start, end, value)

    if text.endswith(I32_SUFFIX):
        value = parse_i32(text[:-len(I32_SUFFIX)])
        if value is None:
            raise MalformedNumericSuffixError("Invalid i32 literal", text, start)
        if not I32_MIN <= value <= I32_MAX:
            raise MalformedNumericSuffixError("i32 literal out of range", text, start)
        return VLispToken(TokenKind.I32, source, start, end, value)

    for suffix in (F32_SUFFIX, I32_SUFFIX):
        if suffix in text:
            raise MalformedNumericSuffixError(f"'{suffix}' should be at the end", text, start)

    return VLispToken(TokenKind.NAME, source, start, end)

def tokenize(source: str) -> list[VLispToken]:
    tokens: list[VLispToken] = []

    def append_text(start: int, end: int) -> None:
        if start != end:
            tokens.append(read_atom(source, start, end))

    start = 0
    in_string = False
    string_start = -1

    for end, c in enumerate(source):
        if in_string:
            if c == "\"":
                tokens.append(VLispToken(TokenKind.STRING, source, start, end))
                in_string = False
                start = end + 1
            continue

        match c:
            case " " | "\t" | "\n" | "\r":
                append_text(start, end)
                start = end + 1
            case "(":
                append_text(start, end)
                tokens.append(VLispToken(TokenKind.LP, source, end, end + 1))
                start = end + 1
            case ")":
                append_text(start, end)
                tokens.append(VLispToken(TokenKind.RP, source, end, end + 1))
                start = end + 1
            case "\"":
                append_text(start, end)
                in_string = True
                string_start = end
                start = end + 1

    if in_string:
        raise UnterminatedStringLiteralError(string_start)

    append_text(start, len(source))

    logger.debug(f"scanned {len(tokens)} tokens from {len(source)} characters")
    return tokens

def read_lists(tokens: list[VLispToken], strict: bool = True) -> VLispList:
    # Each stack entry is the enclosing list's children and its opening paren
    elements: list[SyntaxNode] = []
    open_token: Optional[VLispToken] = None
    stack: list[tuple[list[SyntaxNode], Optional[VLispToken]]] = []

    for token in tokens:
        match token.kind:
            case TokenKind.LP:
                stack.append((elements, open_token))
                elements = []
                open_token = token
            case TokenKind.RP:
                if not stack:
                    raise UnbalancedCloseParenError(token.start)
                node = VLispList(tuple(elements), open_token.start, token.end)
                elements, open_token = stack.pop()
                elements.append(node)
            case _:
                elements.append(VLispAtom(token))

    source_end = len(tokens[0].source) if tokens else 0

    if stack:
        if strict:
            raise UnbalancedOpenParenError(open_token.start, len(stack))
        logger.warning(f"closing {len(stack)} unclosed list(s) at end of input, innermost starting at position {open_token.start}")
        while stack:
            node = VLispList(tuple(elements), open_token.start, source_end)
            elements, open_token = stack.pop()
            elements.append(node)

    logger.debug(f"read {len(elements)} top-level forms")
    return VLispList(tuple(elements), 0, source_end)

def read_str(source: str, strict: bool = True) -> VLispList:
    return read_lists(tokenize(source), strict)
