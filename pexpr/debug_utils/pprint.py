from pexpr import Value
from pexpr.errors import PexprError
from pexpr.types.value import ValueKind, kind_of

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_STRING = "\033[92m"
COLOR_NUMBER = "\033[94m"
COLOR_BOOLEAN = "\033[95m"
COLOR_ERROR = "\033[91m"

_COLORS = {
    ValueKind.STRING: COLOR_STRING,
    ValueKind.INT: COLOR_NUMBER,
    ValueKind.FLOAT: COLOR_NUMBER,
    ValueKind.BOOLEAN: COLOR_BOOLEAN,
}


def colorize(text: str, color: str, enabled: bool = True) -> str:
    return f"{color}{text}{RESET}" if enabled else text


def format_value(value: Value, color: bool = False) -> str:
    """Render a value for display.

    Strings are double-quoted, booleans lowercase, arrays bracketed with
    space-separated elements: `[ "a" 1 true ]`.
    """
    kind = kind_of(value)
    if kind is ValueKind.ARRAY:
        inner = " ".join(format_value(x, color) for x in value)
        return f"[ {inner} ]" if inner else "[ ]"
    if kind is ValueKind.STRING:
        text = f'"{value}"'
    elif kind is ValueKind.BOOLEAN:
        text = "true" if value else "false"
    else:
        text = str(value)
    return colorize(text, _COLORS[kind], color)


def format_error(error: PexprError, color: bool = False) -> str:
    return colorize(error.message, COLOR_ERROR, color)
