"""Exceptions raised while instantiating an object graph from parameters."""

from typing import Any, Iterable, Optional, Sequence

__all__ = [
    "InstantiationError",
    "InvalidTypeError",
    "NoConstructorFoundError",
    "ConversionFailedError",
    "AmbiguousParameterError",
    "ConstructorThrewError",
]


class InstantiationError(Exception):
    """Base class for every failure that aborts an instantiation."""

    pass


class InvalidTypeError(InstantiationError):
    """Raised when a target's type cannot be instantiated at all.

    Attributes:
        target: The offending target.
        reason: Why the type was rejected.
    """

    def __init__(self, target: Any, reason: str):
        super().__init__(f"Cannot instantiate {target}: {reason}")
        self.target = target
        self.reason = reason


class NoConstructorFoundError(InstantiationError):
    """Raised when no constructor (or primitive witness) matches the parameters.

    Attributes:
        target: The target being instantiated.
        parameter_names: The first components that were available.
        constructors: The candidate constructors that were considered.
    """

    def __init__(
        self,
        target: Any,
        parameter_names: Iterable[str],
        constructors: Optional[Sequence[Any]] = None,
    ):
        if constructors is not None:
            candidates = ", ".join(str(c) for c in constructors)
            message = (
                f"No constructor of {target} matches parameters "
                f"{sorted(parameter_names)}; candidates were: {candidates}"
            )
        else:
            message = f"No parameter supplies a value for {target}"
        super().__init__(message)
        self.target = target
        self.parameter_names = frozenset(parameter_names)
        self.constructors = list(constructors or ())


class ConversionFailedError(InstantiationError):
    """Raised when a text value cannot be decoded into a primitive.

    Attributes:
        kind: The primitive kind that was requested.
        value: The text that failed to convert.
        detail: A short description of the problem.
    """

    def __init__(self, kind: Any, value: Optional[str], detail: str):
        super().__init__(f"Cannot convert {value!r} to {kind}: {detail}")
        self.kind = kind
        self.value = value
        self.detail = detail


class AmbiguousParameterError(InstantiationError):
    """Raised when more than one parameter could supply a single value.

    Attributes:
        name: The target name that was looked up.
        parameters: The competing parameters.
    """

    def __init__(self, name: str, parameters: Sequence[Any]):
        super().__init__(
            f"More than one parameter is named after '{name}': {list(parameters)}"
        )
        self.name = name
        self.parameters = list(parameters)


class ConstructorThrewError(InstantiationError):
    """Raised when a selected constructor raises; the original is the __cause__.

    Attributes:
        constructor: The constructor that was invoked.
        cause: The exception it raised.
    """

    def __init__(self, constructor: Any, cause: BaseException):
        super().__init__(f"{constructor} raised {type(cause).__name__}: {cause}")
        self.constructor = constructor
        self.cause = cause
