from pexpr.builtin.builtins import ArgKind, Builtin, BUILTINS, DEFAULT_BUILTINS, make_registry

__all__ = ["ArgKind", "Builtin", "BUILTINS", "DEFAULT_BUILTINS", "make_registry"]
