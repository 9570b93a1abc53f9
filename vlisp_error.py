class VLispError(Exception):
    pass

class VLispSyntaxError(VLispError):
    start: int

    def __init__(self, message: str, start: int):
        super().__init__(message)
        self.start = start

class UnterminatedStringLiteralError(VLispSyntaxError):
    def __init__(self, start: int):
        super().__init__(f"EOF encountered while reading string starting at position {start}", start)

class MalformedNumericSuffixError(VLispSyntaxError):
    text: str

    def __init__(self, message: str, text: str, start: int):
        super().__init__(f"{message}: '{text}' at position {start}", start)
        self.text = text

class UnbalancedCloseParenError(VLispSyntaxError):
    def __init__(self, start: int):
        super().__init__(f"Unbalanced parentheses: unexpected ')' at position {start}", start)

class UnbalancedOpenParenError(VLispSyntaxError):
    depth: int

    def __init__(self, start: int, depth: int = 1):
        super().__init__(f"EOF encountered while reading list starting at position {start} ({depth} unclosed)", start)
        self.depth = depth
