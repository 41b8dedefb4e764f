"""Recursive-descent parser and tree-walking evaluator for the exprlang language.

Formally, the grammar is

```
<expr>      ::= <term> (("+" | "-") <term>)*                ; left-associative
<term>      ::= <factor> (("*" | "/") <factor>)*            ; left-associative
<factor>    ::= <int_literal>                               ; decimal, 0b, 0o or 0x; must fit in 32 bits
              | <string_literal>
              | <char_literal>                              ; exactly one character between single quotes
              | "(" <expr> ")"
              | <let_stmt>                                  ; identifier is the keyword "let"
              | <assignment>                                ; identifier followed by "="
              | <ident>

<let_stmt>   ::= "let" <ident> (":" <ident>)? "=" <expr>    ; the type name is kept verbatim, never checked
<assignment> ::= <ident> "=" <expr>
```

The parser holds a single token of lookahead (`current`). Deciding between <assignment> and <ident> needs a second
token, which is read from a clone of the lexer so that the live cursor does not move until a branch is chosen.

Every rule returns None if its input is malformed or incomplete: no partial trees are ever returned, and no reason is
attached (the reason is only logged at DEBUG level). The one exception is Parser.expect, an internal consistency check
that raises InternalError.

Evaluation follows the same policy. Node.eval returns None for type-mismatched arithmetic, division by zero and integer
overflow, in contrast to the strict DataValue operators in values.py.
"""

import logging
from abc import ABC, abstractmethod

from exprlang.lang.error import InternalError
from exprlang.syntax.lexical import Lexer, Token
from exprlang.syntax.values import Char, Int, Int32, Null, String

logger = logging.getLogger(__name__)

KEYWORDS = frozenset(["let", "if", "for", "while", "match"])


class Node(ABC):
    """Superclass of all syntax tree nodes. Children are owned by exactly one parent, so trees compare structurally."""

    def __init__(self, *nodes):
        self.nodes = list(nodes)
        self._cls = type(self).__name__

    @abstractmethod
    def eval(self):
        """This method should reduce the tree rooted at self to a DataValue, or return None if it cannot be reduced."""

    @property
    def fields(self):
        """Non-node attributes shown by display/repr and compared by __eq__."""
        return ()

    def display(self, indents=0):
        """Displays Node tree with readable format.

        Format:
        <Node>(<fields>, nodes=[
            <Node>(<fields>, nodes=[
                ...
                <Node>(<fields>)  # <-- if nodes is empty
            ])
        ])
        """
        def expand(node, indents):
            parts = [f"{'    ' * indents}{node._cls}(" + ", ".join(repr(field) for field in node.fields)]
            if node.nodes:
                parts.append(", nodes=[" if node.fields else "nodes=[")
                for idx, sub_node in enumerate(node.nodes):
                    parts += ["\n", (sub_node, indents + 1)]
                    if idx != len(node.nodes) - 1:
                        parts.append(",")
                parts.append(f"\n{'    ' * indents}]")
            return parts + [")"]

        return Node._render(self, lambda node: expand(node, indents), expand)

    @staticmethod
    def _render(root, expand_root, expand):
        """Joins the text produced by expand without recursion, so flat chains of thousands of operators can be shown.
        expand returns a list of strings and (node, indents) pairs, in output order.
        """
        result = []
        stack = list(reversed(expand_root(root)))
        while stack:
            part = stack.pop()
            if isinstance(part, str):
                result.append(part)
            else:
                stack.extend(reversed(expand(*part)))
        return "".join(result)

    def __repr__(self):
        def expand(node, __=0):
            parts = [f"{node._cls}(", ", ".join(repr(field) for field in node.fields)]
            for idx, sub_node in enumerate(node.nodes):
                if idx or node.fields:
                    parts.append(", ")
                parts.append((sub_node, 0))
            return parts + [")"]

        return Node._render(self, expand, expand)

    def __str__(self):
        return self.display()

    def __eq__(self, other):
        pairs = [(self, other)]
        while pairs:
            node, other_node = pairs.pop()
            if not isinstance(other_node, type(node)) or node.fields != other_node.fields:
                return False
            if len(node.nodes) != len(other_node.nodes):
                return False
            pairs.extend(zip(node.nodes, other_node.nodes))
        return True

    def __hash__(self):
        return hash((self._cls, self.fields, len(self.nodes)))


class IntLiteral(Node):
    """32-bit integer literal. The radix of the source text is not kept."""

    def __init__(self, value):
        super().__init__()
        self.value = value

    @property
    def fields(self):
        return (self.value,)

    def eval(self):
        return Int32(self.value)


class StringLiteral(Node):
    """String literal, without its surrounding double quotes."""

    def __init__(self, text):
        super().__init__()
        self.text = text

    @property
    def fields(self):
        return (self.text,)

    def eval(self):
        return String(self.text)


class CharLiteral(Node):

    def __init__(self, char):
        super().__init__()
        self.char = char

    @property
    def fields(self):
        return (self.char,)

    def eval(self):
        return Char(self.char)


class Ident(Node):
    """Bare identifier reference. There is no environment to look names up in, so it cannot be evaluated."""

    def __init__(self, name):
        super().__init__()
        self.name = name

    @property
    def fields(self):
        return (self.name,)

    def eval(self):
        logger.debug("'%s' has no binding", self.name)
        return None


class BinaryOp(Node):
    """Arithmetic on two children. Both must evaluate to the same DataValue variant."""

    def __init__(self, left, right):
        super().__init__(left, right)

    @property
    def left(self):
        return self.nodes[0]

    @property
    def right(self):
        return self.nodes[1]

    @abstractmethod
    def apply(self, left, right):
        """This method should combine two DataValues of the same variant, returning None if that is not possible."""

    def eval(self):
        """Folds the left spine of chained operators (`1 + 2 - 3 + 4`) iteratively, innermost first."""
        spine = []
        node = self
        while isinstance(node, BinaryOp):
            spine.append(node)
            node = node.left

        value = node.eval()
        for op in reversed(spine):
            if value is None:
                return None
            right = op.right.eval()
            if right is None:
                return None

            if type(value) is not type(right):
                logger.debug("%s of mismatched %r and %r", op._cls, value, right)
                return None
            value = op.apply(value, right)
        return value

    @staticmethod
    def _int(left, value):
        """Wraps value in the variant of left, or returns None if it does not fit."""
        if not isinstance(left, Int) or not type(left).in_range(value):
            logger.debug("%r overflows %s", value, type(left).__name__)
            return None
        return type(left)(value)


class Add(BinaryOp):

    def apply(self, left, right):
        if isinstance(left, String):
            return String(left.value + right.value)
        if isinstance(left, Int):
            return BinaryOp._int(left, left.value + right.value)
        return None


class Sub(BinaryOp):

    def apply(self, left, right):
        if isinstance(left, Int):
            return BinaryOp._int(left, left.value - right.value)
        return None


class Mul(BinaryOp):

    def apply(self, left, right):
        if isinstance(left, Int):
            return BinaryOp._int(left, left.value * right.value)
        return None


class Div(BinaryOp):

    def apply(self, left, right):
        if not isinstance(left, Int):
            return None
        if right.value == 0:
            logger.debug("division by zero")
            return None
        return BinaryOp._int(left, Int.truncdiv(left.value, right.value))


class VariableDefinition(Node):
    """`let name (: type_name)? = value`. Evaluates to Null; the binding is not stored anywhere."""

    def __init__(self, name, type_name, value):
        super().__init__(value)
        self.name = name
        self.type_name = type_name

    @property
    def value(self):
        return self.nodes[0]

    @property
    def fields(self):
        return (self.name, self.type_name)

    def eval(self):
        return Null()


class Assignment(Node):
    """`name = value`. Evaluates to Null; the name does not need to have been defined."""

    def __init__(self, name, value):
        super().__init__(value)
        self.name = name

    @property
    def value(self):
        return self.nodes[0]

    @property
    def fields(self):
        return (self.name,)

    def eval(self):
        return Null()


class Parser:
    """Builds a Node tree from source text. A Parser is single-use: it reads its input once, front to back."""
    INT_LITERALS = {
        Token.Int10Literal: (10, 0),  # (radix, length of prefix)
        Token.Int2Literal: (2, 2),
        Token.Int8Literal: (8, 2),
        Token.Int16Literal: (16, 2),
    }

    def __init__(self, source):
        self.lexer = Lexer(source)
        self.current = None
        self._nested = False    # whether or not an expr call is already on the stack
        self.advance()

    def advance(self):
        """Moves current to the next token. current is None at end of input and at unrecognized characters."""
        self.current = next(self.lexer, None)

    @property
    def slice(self):
        """Source text of current."""
        return self.lexer.slice

    @property
    def at_end(self):
        """Whether or not all input has been consumed."""
        start, end = self.lexer.span
        return self.current is None and start == end

    def expect(self, expected):
        """Consumes current if its text is expected. Anything else means a rule was entered on input it does not own,
        so it raises InternalError instead of returning None.
        """
        if self.current is None or self.slice != expected:
            found = self.slice if self.current is not None else "end of input"
            raise InternalError("expected '{}', found '{}'", [expected, found])
        self.advance()

    def _next_is_equal(self):
        """Whether or not the token after current is "=". Reads from a clone of the lexer."""
        lookahead = self.lexer.clone()
        return next(lookahead, None) is Token.Equal

    def expr(self):
        """<expr> ::= <term> (("+" | "-") <term>)*

        Nesting deep enough to exhaust the interpreter stack (hundreds of unclosed parentheses) gives None, like any
        other input the parser cannot build a tree for.
        """
        if self._nested:
            return self._expr()

        self._nested = True
        try:
            return self._expr()
        except RecursionError:
            logger.debug("nesting too deep before offset %d", self.lexer.span[0])
            return None
        finally:
            self._nested = False

    def _expr(self):
        value = self.term()
        while self.current in (Token.Add, Token.Sub):
            node = Add if self.current is Token.Add else Sub
            self.advance()

            right = self.term()
            if value is None or right is None:
                logger.debug("%s is missing an operand", node.__name__)
                return None
            value = node(value, right)
        return value

    def term(self):
        """<term> ::= <factor> (("*" | "/") <factor>)*"""
        value = self.factor()
        while self.current in (Token.Mul, Token.Div):
            node = Mul if self.current is Token.Mul else Div
            self.advance()

            right = self.factor()
            if value is None or right is None:
                logger.debug("%s is missing an operand", node.__name__)
                return None
            value = node(value, right)
        return value

    def factor(self):
        """<factor> ::= literal | "(" <expr> ")" | <let_stmt> | <assignment> | <ident>"""
        token = self.current
        if token is None:
            logger.debug("expected a value, found end of input")
            return None

        if token in Parser.INT_LITERALS:
            return self._int_literal()

        elif token is Token.StringLiteral:
            node = StringLiteral(self.slice[1:-1])
            self.advance()
            return node

        elif token is Token.CharLiteral:
            return self._char_literal()

        elif token is Token.LParent:
            self.advance()
            value = self.expr()
            if self.current is not Token.RParent:
                logger.debug("unmatched '(' before offset %d", self.lexer.span[0])
                return None
            self.advance()
            return value

        elif token is Token.Ident:
            return self._ident()

        logger.debug("'%s' cannot start a value", self.slice)
        return None

    def _int_literal(self):
        radix, prefix = Parser.INT_LITERALS[self.current]
        value = int(self.slice[prefix:], radix)
        if not Int32.in_range(value):
            logger.debug("'%s' does not fit in 32 bits", self.slice)
            return None
        self.advance()
        return IntLiteral(value)

    def _char_literal(self):
        text = self.slice
        if len(text) != 3:
            logger.debug("%s is not a single character", text)
            return None
        self.advance()
        return CharLiteral(text[1])

    def _ident(self):
        name = self.slice
        if name in KEYWORDS:
            return self._keyword(name)
        if self._next_is_equal():
            return self.parse_value_assignment()

        self.advance()
        return Ident(name)

    def _keyword(self, keyword):
        if keyword == "let":
            return self.parse_value_definition()
        logger.debug("'%s' statements are not supported", keyword)
        return None

    def parse_value_definition(self):
        """<let_stmt> ::= "let" <ident> (":" <ident>)? "=" <expr>"""
        self.expect("let")

        if self.current is not Token.Ident:
            logger.debug("'let' must be followed by a name")
            return None
        name = self.slice
        self.advance()

        type_name = None
        if self.current is Token.Colon:
            self.advance()
            if self.current is not Token.Ident:
                logger.debug("':' must be followed by a type name")
                return None
            type_name = self.slice
            self.advance()

        if self.current is not Token.Equal:
            logger.debug("definition of '%s' is missing '='", name)
            return None
        self.advance()

        value = self.expr()
        if value is None:
            return None
        return VariableDefinition(name, type_name, value)

    def parse_value_assignment(self):
        """<assignment> ::= <ident> "=" <expr>"""
        name = self.slice
        self.advance()
        self.expect("=")

        value = self.expr()
        if value is None:
            return None
        return Assignment(name, value)
