"""Arithmetic expressions for the memory setting.

Memory can be configured as a formula (``64*1024``) instead of a pre-computed
number of kibibytes. The grammar is plain infix arithmetic over non-negative
decimal integers::

    expression := term (("+" | "-") term)*
    term       := factor (("*" | "/") factor)*
    factor     := INTEGER | "(" expression ")"

Whitespace is allowed between tokens. There is no unary minus. Parentheses
nest at most MAX_DEPTH levels deep.

Results are unsigned 32-bit integers. ``+``, ``-`` and ``*`` wrap around
modulo 2**32, so ``5-10`` evaluates to 4294967291 instead of failing. This
wraparound is kept for compatibility with settings strings already in use.
``/`` is truncating integer division.
"""

# built-in imports
from dataclasses import dataclass
from re import compile as re_compile
from typing import Iterator, Literal

# local imports
from .errors import UnsupportedExpression
from .str import to_unsigned

Operator = Literal["+", "-", "*", "/"]

UINT32_MASK = 0xFFFFFFFF

_TOKEN = re_compile(
    r"\s*(?:(?P<literal>[0-9][0-9A-Za-z_.]*)|(?P<name>[A-Za-z_]\w*)|(?P<symbol>\S))"
)
_END = "end of expression"

MAX_DEPTH = 64
"""Deepest parenthesis nesting accepted by the parser."""


@dataclass(frozen=True, slots=True)
class IntegerLiteral:
    value: int


@dataclass(frozen=True, slots=True)
class BinaryOp:
    op: Operator
    left: "Node"
    right: "Node"


@dataclass(frozen=True, slots=True)
class Parenthesized:
    inner: "Node"


Node = IntegerLiteral | BinaryOp | Parenthesized


def _tokenize(expression: str) -> Iterator[str]:
    """Split an expression into literals and single-character symbols.

    Args:
        expression (str): The expression.

    Raises:
        UnsupportedExpression: On identifiers, non-decimal literals and
            unknown symbols.

    Yields:
        str: The next token.
    """
    pos = 0
    # _TOKEN matches any non-space character, so only trailing space is left
    while found := _TOKEN.match(expression, pos):
        pos = found.end()

        if (literal := found["literal"]) is not None:
            if not literal.isdigit():
                raise UnsupportedExpression(literal)
            yield literal
        elif found["name"] is not None:
            raise UnsupportedExpression(found["name"])
        elif found["symbol"] in "+-*/()":
            yield found["symbol"]
        else:
            raise UnsupportedExpression(found["symbol"])


class _Parser:
    def __init__(self, expression: str) -> None:
        self.tokens = list(_tokenize(expression))
        self.pos = 0
        self.depth = 0

    def peek(self) -> str:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else _END

    def take(self) -> str:
        token = self.peek()
        self.pos += 1
        return token

    def parse(self) -> Node:
        node = self.expression()
        if (token := self.peek()) != _END:
            raise UnsupportedExpression(token)
        return node

    def expression(self) -> Node:
        node = self.term()
        while self.peek() in ("+", "-"):
            node = BinaryOp(self.take(), node, self.term())
        return node

    def term(self) -> Node:
        node = self.factor()
        while self.peek() in ("*", "/"):
            node = BinaryOp(self.take(), node, self.factor())
        return node

    def factor(self) -> Node:
        token = self.take()

        if token == "(":
            self.depth += 1
            if self.depth > MAX_DEPTH:
                raise UnsupportedExpression(token)
            inner = self.expression()
            if (closing := self.take()) != ")":
                raise UnsupportedExpression(closing)
            self.depth -= 1
            return Parenthesized(inner)

        if token.isdigit():
            return IntegerLiteral(to_unsigned(token))

        # operators, stray ")" and running out of tokens
        raise UnsupportedExpression(token)


def parse(expression: str) -> Node:
    """Parse a memory expression into its syntax tree.

    Args:
        expression (str): The expression, e.g. ``(64 * 1024) / 2``.

    Raises:
        UnsupportedExpression: If the expression is malformed or contains
            anything but decimal integers, ``+ - * /`` and parentheses.
        OverflowError: If a literal does not fit into 32 bits.

    Returns:
        Node: The root node.
    """
    return _Parser(expression).parse()


def _apply(op: Operator, x: int, y: int) -> int:
    match op:
        case "+":
            return (x + y) & UINT32_MASK
        case "-":
            return (x - y) & UINT32_MASK
        case "*":
            return (x * y) & UINT32_MASK
        case "/":
            return x // y
    raise UnsupportedExpression(op)


def evaluate_node(node: Node) -> int:
    """Evaluate a syntax tree with unsigned 32-bit arithmetic.

    The tree is walked with an explicit stack, so long operator chains do not
    hit the recursion limit.

    Args:
        node (Node): The root node.

    Raises:
        ZeroDivisionError: If a divisor evaluates to zero.

    Returns:
        int: The value.
    """
    values: list[int] = []
    pending: list[Node | str] = [node]

    while pending:
        match pending.pop():
            case IntegerLiteral(value):
                values.append(value)
            case Parenthesized(inner):
                pending.append(inner)
            case BinaryOp(op, left, right):
                # left is evaluated first, then right, then op is applied
                pending += [op, right, left]
            case str(op):
                y = values.pop()
                x = values.pop()
                values.append(_apply(op, x, y))
            case other:
                raise UnsupportedExpression(type(other).__name__)

    return values.pop()


def evaluate(expression: str) -> int:
    """Parse and evaluate a memory expression.

    Args:
        expression (str): The expression, e.g. ``((64*1024) + (20-10)) / 2``.

    Returns:
        int: The value as an unsigned 32-bit integer.
    """
    return evaluate_node(parse(expression))
