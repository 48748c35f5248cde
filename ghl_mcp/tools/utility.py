"""Utility tools: date arithmetic and a safe calculator.

These do not call GHL. They exist so an agent can compute "tomorrow at
4pm" or "15% of 5000" exactly instead of guessing.
"""

from __future__ import annotations

import ast
import math
import operator
import re
from datetime import datetime, timedelta
from typing import Any, Callable, Dict

from ..dates import iso_z, local_timezone_name
from ..mcp_server import ghl_tool

CATEGORY = "utility"

PERCENT_OF = re.compile(r"(\d+\.?\d*)%\s+of\s+(\d+\.?\d*)")

BINARY_OPS: Dict[type, Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Mod: operator.mod,
    # Float, so oversized powers overflow instead of building huge ints
    ast.Pow: math.pow,
}
UNARY_OPS: Dict[type, Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}
FUNCTIONS: Dict[str, Callable[..., Any]] = {
    "sqrt": math.sqrt,
    "pow": math.pow,
    "abs": abs,
    "floor": math.floor,
    "ceil": math.ceil,
    "round": round,
    "sin": math.sin,
    "cos": math.cos,
    "log": math.log,
}
CONSTANTS = {"pi": math.pi}

# Decimal places accepted by calculate
MAX_PRECISION = 100


def _eval_node(node: ast.AST) -> Any:
    if isinstance(node, ast.Expression):
        return _eval_node(node.body)
    if isinstance(node, ast.Constant) and type(node.value) in (int, float):
        return node.value
    if isinstance(node, ast.Name) and node.id in CONSTANTS:
        return CONSTANTS[node.id]
    if isinstance(node, ast.BinOp) and type(node.op) in BINARY_OPS:
        return BINARY_OPS[type(node.op)](_eval_node(node.left), _eval_node(node.right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in UNARY_OPS:
        return UNARY_OPS[type(node.op)](_eval_node(node.operand))
    if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) and node.func.id in FUNCTIONS:
        if node.keywords:
            raise ValueError(f"Keyword arguments are not supported: {node.func.id}")
        return FUNCTIONS[node.func.id](*[_eval_node(arg) for arg in node.args])
    raise ValueError(f"Unsupported expression element: {type(node).__name__}")


def safe_eval(expression: str) -> float:
    """Evaluate an arithmetic expression without ``eval``.

    Supports + - * / % ** (and ^ as power), parentheses, the functions
    sqrt pow abs floor ceil round sin cos log, and the constant pi.

    Raises:
        ValueError: For anything else, division by zero, or a non-finite result.
    """
    text = expression.lower().replace("^", "**")
    try:
        tree = ast.parse(text, mode="eval")
        result = _eval_node(tree)
        if isinstance(result, bool) or not isinstance(result, (int, float)):
            raise ValueError("Invalid calculation result")
        value = float(result)
    except SyntaxError as e:
        raise ValueError(f"Invalid expression: {expression}") from e
    except (ZeroDivisionError, OverflowError, TypeError) as e:
        raise ValueError(str(e)) from e
    if not math.isfinite(value):
        raise ValueError("Invalid calculation result")
    return value


def _round(value: float, precision: int) -> float:
    return float(f"{value:.{precision}f}")


def _failure(expression: str, message: str) -> dict:
    return {"success": False, "error": "Calculation failed", "message": message, "expression": expression}


@ghl_tool(CATEGORY)
def calculate_future_datetime(days: int = 0, hours: int = 0, minutes: int = 0, use_absolute_time: bool = True) -> dict:
    """Compute a date/time relative to now, formatted for GHL.

    With use_absolute_time (default), hours and minutes are the time of day on
    the target day: days=1, hours=16 is tomorrow at 4pm. Otherwise they are
    added to the current time: hours=2 is two hours from now.

    Args:
        days: Days from today (1 = tomorrow, 7 = next week)
        hours: Hour of day (24h) in absolute mode, hours to add in relative mode
        minutes: Minute of the hour, or minutes to add
        use_absolute_time: Treat hours/minutes as a time of day (default: True)

    Returns:
        {"isoString", "humanReadable", "timestamp" (ms), "date", "time", "timezone", "calculation"}
    """
    now = datetime.now().astimezone()
    if use_absolute_time:
        midnight = (now + timedelta(days=days)).replace(hour=0, minute=0, second=0, microsecond=0)
        target = midnight + timedelta(hours=hours, minutes=minutes)
    else:
        target = now + timedelta(days=days, hours=hours, minutes=minutes)

    hour12 = target.hour % 12 or 12
    meridiem = "AM" if target.hour < 12 else "PM"
    return {
        "isoString": iso_z(target),
        "humanReadable": target.strftime("%a, %b %d, %Y, ") + f"{hour12:02d}:{target.minute:02d} {meridiem} {target.tzname()}",
        "timestamp": int(target.timestamp() * 1000),
        "date": f"{target.month}/{target.day}/{target.year}",
        "time": f"{hour12}:{target.minute:02d}:{target.second:02d} {meridiem}",
        "timezone": local_timezone_name(target),
        "calculation": {
            "daysAdded": days,
            "hoursSet": hours if use_absolute_time else None,
            "hoursAdded": None if use_absolute_time else hours,
            "minutesSet": minutes if use_absolute_time else None,
            "minutesAdded": None if use_absolute_time else minutes,
            "mode": "absolute" if use_absolute_time else "relative",
        },
    }


@ghl_tool(CATEGORY)
def calculate(expression: str, precision: int = 2) -> dict:
    """Evaluate a math expression exactly.

    Examples: "15% of 5000", "sqrt(144)", "(299 * 0.8) + 50", "23 / 150 * 100".

    Args:
        expression: Arithmetic with + - * / % **, parentheses, sqrt pow abs floor
            ceil round sin cos log and pi, or "X% of Y"
        precision: Decimal places in the result, 0 to 100 (default: 2)

    Returns:
        {"success": True, "expression", "result", "formatted"} or, when the
        expression cannot be evaluated,
        {"success": False, "error": "Calculation failed", "message", "expression"}.
    """
    if not 0 <= precision <= MAX_PRECISION:
        return _failure(expression, f"precision must be between 0 and {MAX_PRECISION}")

    match = PERCENT_OF.search(expression.lower().strip())
    if match:
        value = float(match.group(1)) / 100 * float(match.group(2))
        return {
            "success": True,
            "expression": expression,
            "result": _round(value, precision),
            "formatted": f"{value:.{precision}f}",
        }

    try:
        value = safe_eval(expression)
    except ValueError as e:
        return _failure(expression, str(e))
    rounded = _round(value, precision)
    return {
        "success": True,
        "expression": expression,
        "result": rounded,
        "formatted": f"{rounded:,.{precision}f}",
    }
