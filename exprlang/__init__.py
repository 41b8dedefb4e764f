"""exprlang: an arithmetic and variable-binding expression language.

Basic program flow:
    1. Lexer: splits a statement into tokens on demand (see exprlang/syntax/lexical.py)
    2. Parser: builds a syntax tree by recursive descent over those tokens, with one token of lookahead plus a
       speculative scan for assignments (see exprlang/syntax/parser.py)
    3. Evaluation: walks the syntax tree and reduces it to a DataValue (see exprlang/syntax/values.py)

exprlang/lang wraps the above into sessions, an interactive shell and error reporting.
"""

__version__ = "0.1.0"
