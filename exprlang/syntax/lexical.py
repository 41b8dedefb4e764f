"""Tokenizer for the exprlang language.

The lexer is pull-style: the parser asks for one token at a time and reads the text that produced it through
`Lexer.slice`. Tokens themselves carry no text.

Lexical grammar, in the order ties are broken:

```
<l_parent>      ::= "("
<r_parent>      ::= ")"
<equal>         ::= "="
<add>           ::= "+"
<sub>           ::= "-"
<mul>           ::= "*"
<div>           ::= "/"
<colon>         ::= ":"
<string>        ::= '"' [^"]* '"'          ; slice keeps the quotes
<char>          ::= "'" [^']* "'"          ; slice keeps the quotes, validated by the parser
<int10>         ::= [0-9]+
<int2>          ::= "0b" [01]+
<int8>          ::= "0o" [0-7]+
<int16>         ::= "0x" [0-9a-fA-F]+
<ident>         ::= [a-zA-Z_] [a-zA-Z0-9_]*
```

Whitespace (`[ \\t\\n\\f]+`) is skipped between tokens. The longest match wins, so `0x1A` is a single Int16Literal
rather than `0` followed by an identifier. If no rule matches at the cursor, the lexer yields None for that position
(one character is skipped).
"""

import re
from copy import copy
from enum import Enum


class Token(Enum):
    """Classification of a lexeme."""
    LParent = "("
    RParent = ")"
    Equal = "="
    Add = "+"
    Sub = "-"
    Mul = "*"
    Div = "/"
    Colon = ":"
    StringLiteral = "string literal"
    CharLiteral = "char literal"
    Int10Literal = "decimal literal"
    Int2Literal = "binary literal"
    Int8Literal = "octal literal"
    Int16Literal = "hexadecimal literal"
    Ident = "identifier"

    def __repr__(self):
        return f"Token.{self.name}"


class Lexer:
    """Forward-only token stream over a source string. The only mutable state is an integer cursor, so a snapshot is a
    shallow copy (see clone).
    """
    SKIP = re.compile(r"[ \t\n\f]+")

    # (token, pattern); the order is the priority used when two rules match the same length
    RULES = [
        (Token.LParent, re.compile(r"\(")),
        (Token.RParent, re.compile(r"\)")),
        (Token.Equal, re.compile(r"=")),
        (Token.Add, re.compile(r"\+")),
        (Token.Sub, re.compile(r"-")),
        (Token.Mul, re.compile(r"\*")),
        (Token.Div, re.compile(r"/")),
        (Token.Colon, re.compile(r":")),
        (Token.StringLiteral, re.compile(r'"[^"]*"')),
        (Token.CharLiteral, re.compile(r"'[^']*'")),
        (Token.Int10Literal, re.compile(r"[0-9]+")),
        (Token.Int2Literal, re.compile(r"0b[01]+")),
        (Token.Int8Literal, re.compile(r"0o[0-7]+")),
        (Token.Int16Literal, re.compile(r"0x[0-9a-fA-F]+")),
        (Token.Ident, re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")),
    ]

    def __init__(self, source):
        self.source = source
        self.pos = 0                # cursor: offset of the first unread character
        self.span = (0, 0)          # offsets of the last lexeme (or unmatched character)

    @property
    def slice(self):
        """Exact source text that produced the last token."""
        start, end = self.span
        return self.source[start:end]

    def clone(self):
        """Returns an independent lexer at the same position. Advancing the clone never moves self."""
        return copy(self)

    def _longest_match(self, start):
        """Returns (token, end) of the longest rule matching at start, or (None, start) if no rule matches."""
        best, best_end = None, start
        for token, pattern in Lexer.RULES:
            match = pattern.match(self.source, start)
            if match and match.end() > best_end:
                best, best_end = token, match.end()
        return best, best_end

    def __iter__(self):
        return self

    def __next__(self):
        """Returns the next Token, or None if the characters at the cursor do not form a token. Raises StopIteration
        at end of input.
        """
        skipped = Lexer.SKIP.match(self.source, self.pos)
        if skipped:
            self.pos = skipped.end()

        if self.pos >= len(self.source):
            self.span = (self.pos, self.pos)
            raise StopIteration

        start = self.pos
        token, end = self._longest_match(start)
        if token is None:
            end = start + 1

        self.pos = end
        self.span = (start, end)
        return token

    def __repr__(self):
        return f"Lexer(pos={self.pos}, slice={self.slice!r})"
