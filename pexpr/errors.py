from __future__ import annotations

from typing import Optional


class PexprError(Exception):
    """ Base class for all pexpr errors"""

    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.message = message
        # Offset of the offending token in the source text, when known
        self.offset = offset


class PexprSyntaxError(PexprError):
    """ Raised when parentheses or brackets are malformed"""


class PexprDefinitionError(PexprSyntaxError):
    """ Raised when a (def <identifier> <literal>) form has the wrong shape"""


class PexprUndefinedConstant(PexprError):
    """ Raised when an identifier is used as a value before it is defined"""


class PexprInvalidFunction(PexprError):
    """ Raised when a function name matches no builtin"""


class PexprArityError(PexprError):
    """ Raised when fewer values are available than a builtin expects"""


class PexprTypeError(PexprError):
    """ Raised when an argument's kind does not match the builtin signature"""


class PexprCastError(PexprError):
    """ Raised when int/float cannot convert their argument"""


class PexprDomainError(PexprError):
    """ Raised when a builtin is given a value it has no meaning for"""
