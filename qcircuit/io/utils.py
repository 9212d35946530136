"""Angle formatting and parsing for text programs."""

from __future__ import annotations

import ast
import math
import re

_ALLOWED_ANGLE_CHARS = re.compile(r"^[0-9eE\.\s\*\+\-/\(\)pi]+$", re.IGNORECASE)


def angle_str_to_float(s: str) -> float:
    """
    Parse an angle expression to radians.

    Accepts decimal literals (including exponents), ``pi``, the binary
    operators ``+ - * /``, unary minus and parentheses. The expression is
    evaluated by walking its AST; nothing is passed to ``eval``.

    Raises
    ------
    ValueError
        If the expression is empty, malformed or uses anything else.
    """
    s = s.strip()
    if not s:
        raise ValueError("Empty angle expression.")

    if not _ALLOWED_ANGLE_CHARS.match(s):
        raise ValueError(
            f"Angle expression contains disallowed characters: {s!r}. "
            "Only numbers, 'pi', '+', '-', '*', '/', '(', ')' are allowed."
        )

    normalized = re.sub(r"\bpi\b", "PI_PLACEHOLDER", s, flags=re.IGNORECASE)
    try:
        tree = ast.parse(normalized, mode="eval")
    except SyntaxError as e:
        raise ValueError(f"Invalid angle expression syntax: {s!r}. Error: {e}") from None

    def eval_node(node: ast.AST) -> float:
        if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)):
            return float(node.value)

        if isinstance(node, ast.Name):
            if node.id == "PI_PLACEHOLDER":
                return math.pi
            raise ValueError(
                f"Unknown identifier '{node.id}' in angle expression: {s!r}. "
                "Only 'pi' is supported."
            )

        if isinstance(node, ast.BinOp):
            left = eval_node(node.left)
            right = eval_node(node.right)
            if isinstance(node.op, ast.Mult):
                return left * right
            if isinstance(node.op, ast.Div):
                if right == 0:
                    raise ValueError(f"Division by zero in angle expression: {s!r}")
                return left / right
            if isinstance(node.op, ast.Add):
                return left + right
            if isinstance(node.op, ast.Sub):
                return left - right
            raise ValueError(
                f"Unsupported operator in angle expression: {s!r}. "
                "Only *, /, +, - are supported."
            )

        if isinstance(node, ast.UnaryOp):
            if isinstance(node.op, ast.USub):
                return -eval_node(node.operand)
            if isinstance(node.op, ast.UAdd):
                return eval_node(node.operand)

        raise ValueError(f"Unsupported construct in angle expression: {s!r}")

    return float(eval_node(tree.body))


def float_to_angle_str(angle: float, tol: float = 1e-12) -> str:
    """
    Format an angle in radians for a text program.

    Rational multiples of π with a denominator of at most 12 are written
    symbolically ("pi/2", "-pi/4", "3*pi/4", "2*pi"). Anything else is
    written with ``repr`` so it parses back to the identical float.
    """
    angle = float(angle)
    if angle == 0.0:
        return "0"

    pi_multiple = angle / math.pi
    for q in range(1, 13):
        p_float = pi_multiple * q
        p = round(p_float)
        if p != 0 and abs(p_float - p) < tol:
            g = math.gcd(abs(p), q)
            p, q = p // g, q // g
            sign = "-" if p < 0 else ""
            numerator = "pi" if abs(p) == 1 else f"{abs(p)}*pi"
            if q == 1:
                return f"{sign}{numerator}"
            return f"{sign}{numerator}/{q}"

    return repr(angle)


__all__ = ["angle_str_to_float", "float_to_angle_str"]
