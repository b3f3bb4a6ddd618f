"""Arithmetic for the `/math` command.

Input is reduced to an allow-list of characters, then parsed by a small
recursive-descent parser. Nothing is ever handed to `eval`.

Grammar:
    expr   := term (("+" | "-") term)*
    term   := factor (("*" | "/") factor)*
    factor := ("+" | "-") factor | number | "(" expr ")"
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from app.api.models import Interaction, InteractionResponse
from app.commands.base import CommandContext

logger = logging.getLogger(__name__)

MATH_WARNING = "⚠️ Could not evaluate the expression."

_DISALLOWED = re.compile(r"[^-()\d/*+.]")
_NUMBER = re.compile(r"\d+\.?\d*|\.\d+")

Number = int | float


class ExpressionError(ValueError):
    pass


def sanitize_expression(expr: str) -> str:
    """Drop every character outside digits, `.` and `+ - * / ( )`."""

    return _DISALLOWED.sub("", expr or "")


@dataclass(slots=True)
class _Parser:
    text: str
    pos: int = 0

    def _peek(self) -> str | None:
        return self.text[self.pos] if self.pos < len(self.text) else None

    def _take(self) -> str:
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def parse(self) -> Number:
        if not self.text:
            raise ExpressionError("Empty expression")
        value = self._expr()
        if self.pos != len(self.text):
            raise ExpressionError(f"Unexpected {self.text[self.pos]!r} at position {self.pos}")
        return value

    def _expr(self) -> Number:
        value = self._term()
        while self._peek() in ("+", "-"):
            op = self._take()
            rhs = self._term()
            value = value + rhs if op == "+" else value - rhs
        return value

    def _term(self) -> Number:
        value = self._factor()
        while self._peek() in ("*", "/"):
            op = self._take()
            rhs = self._factor()
            if op == "*":
                value = value * rhs
            else:
                if rhs == 0:
                    raise ExpressionError("Division by zero")
                value = value / rhs
        return value

    def _factor(self) -> Number:
        ch = self._peek()
        if ch is None:
            raise ExpressionError("Unexpected end of expression")
        if ch in ("+", "-"):
            self._take()
            operand = self._factor()
            return operand if ch == "+" else -operand
        if ch == "(":
            self._take()
            value = self._expr()
            if self._peek() != ")":
                raise ExpressionError("Missing closing parenthesis")
            self._take()
            return value
        m = _NUMBER.match(self.text, self.pos)
        if m is None:
            raise ExpressionError(f"Unexpected {ch!r} at position {self.pos}")
        self.pos = m.end()
        token = m.group(0)
        return float(token) if "." in token else int(token)


def format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def evaluate(expr: str) -> Number:
    """Sanitize then evaluate. Raises ExpressionError on anything unparseable."""

    try:
        return _Parser(sanitize_expression(expr)).parse()
    except ExpressionError:
        raise
    except (OverflowError, RecursionError, ValueError) as e:
        raise ExpressionError(str(e) or type(e).__name__) from e


def handle_math(interaction: Interaction, ctx: CommandContext) -> InteractionResponse:
    expr = str((interaction.data.option("expression") if interaction.data else None) or "")
    try:
        result = format_number(evaluate(expr))
    except ValueError as e:
        # Also covers ints too long for str() conversion.
        logger.info("math: could not evaluate %r: %s", expr, e)
        return InteractionResponse.message(MATH_WARNING)
    return InteractionResponse.message(f"🧮 Result: {expr} = **{result}**")
