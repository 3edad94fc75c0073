from pexpr.types.symbol import Symbol, DEF
from pexpr.types.value import ValueKind, kind_of, is_number, to_text, serialize
from pexpr.types.environment import Environment

__all__ = [
    "Symbol",
    "DEF",
    "ValueKind",
    "kind_of",
    "is_number",
    "to_text",
    "serialize",
    "Environment",
]
