# Core type aliases for pexpr's data model.
# Runtime values are plain Python types: int, float, str, bool and list (arrays).
# There is no AST: tokens are reduced straight to values by the evaluator.

from typing import Any, Callable, Union

# Runtime value alias
Value = Union[int, float, str, bool, list]

# Builtin implementation: receives the already kind-checked arguments in source order
BuiltinFn = Callable[..., Any]

__version__ = "0.3.0"
