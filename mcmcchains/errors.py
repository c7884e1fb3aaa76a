"""
mcmcchains/errors.py

Exceptions raised while building, slicing and concatenating chains.

Every error derives from ChainsError, itself a ValueError, so callers can
catch the whole family at once or a single validation failure.
"""

__all__ = [
    "ChainsError",
    "ChainsMismatchError",
    "DuplicateNamesError",
    "InvalidDimensionError",
    "NamesMismatchError",
    "NoncontiguousIterationsError",
    "RangeMismatchError",
    "ShapeError",
    "ThinningMismatchError",
    "UnknownSectionError",
    "UnknownVariableError",
]


class ChainsError(ValueError):
    """
    Base error for all mcmcchains failures.
    """

    _msg: str = "{}"

    def __init__(self, *args: object) -> None:
        """
        A single argument is used as a pre-formatted message; several
        arguments fill the class template.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))

    def __str__(self) -> str:
        # KeyError subclasses would otherwise repr() the message
        return str(self.args[0]) if self.args else ""


class UnknownSectionError(ChainsError, KeyError):
    """
    Raised when a requested section is not in the name map.
    """

    _msg = "section {!r} not found in Chains name map {}"


class UnknownVariableError(ChainsError, KeyError):
    """
    Raised when a label is not present on the variable or chain axis.
    """

    _msg = "{!r} not found on the {} axis"


class InvalidDimensionError(ChainsError):
    """
    Raised when concatenating along an axis other than iter, var or chain.
    """


class NoncontiguousIterationsError(ChainsError):
    _msg = "noncontiguous chain iterations: {} follows {} with thinning {}"


class ThinningMismatchError(ChainsError):
    _msg = "chain thinning differs: {} != {}"


class NamesMismatchError(ChainsError):
    _msg = "chain names differ: {} != {}"


class ChainsMismatchError(ChainsError):
    _msg = "sets of chains differ: {} != {}"


class RangeMismatchError(ChainsError):
    _msg = "chain ranges differ: {} != {}"


class DuplicateNamesError(ChainsError):
    """
    Raised when a variable name or chain id would appear twice on an axis.
    """


class ShapeError(ChainsError):
    """
    Raised when a value array does not agree with its axes.
    """
