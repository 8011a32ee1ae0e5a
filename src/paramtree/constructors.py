"""Introspection of the constructors a class offers.

Every class has its primary constructor, the class call itself. Alternate
constructors are classmethods tagged with :func:`constructor`:

    >>> class Money:
    ...     def __init__(self, cents: int):
    ...         self.cents = cents
    ...
    ...     @constructor
    ...     def from_parts(cls, units: int, cents: int) -> "Money":
    ...         return cls(units * 100 + cents)
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional, get_type_hints

from paramtree.errors import ConstructorThrewError, InvalidTypeError

__all__ = ["Formal", "ClassConstructor", "constructor", "class_constructors"]

_CONSTRUCTOR_MARKER = "__paramtree_constructor__"


@dataclass(frozen=True)
class Formal:
    """A formal argument of a constructor.

    Attributes:
        name: The parameter name in the constructor's signature.
        type: The annotated type, or None when the parameter is unannotated.
        required: False when the parameter declares a default.
        positional_only: True when the parameter must be passed positionally.
    """

    name: str
    type: Any
    required: bool = True
    positional_only: bool = False

    def __str__(self):
        type_name = getattr(self.type, "__name__", repr(self.type))
        return f"{self.name}: {type_name}" if self.required else f"{self.name}: {type_name} = ..."


@dataclass(frozen=True)
class ClassConstructor:
    """An ordered list of formal arguments plus the means to invoke them.

    Attributes:
        owner: The class this constructor builds.
        func: The callable to invoke; the class itself or a bound classmethod.
        formals: The formal arguments in signature order.
    """

    owner: type
    func: Callable
    formals: tuple[Formal, ...]

    @property
    def formal_names(self) -> list[str]:
        return [f.name for f in self.formals]

    @property
    def required_names(self) -> set[str]:
        return {f.name for f in self.formals if f.required}

    @property
    def is_typed(self) -> bool:
        return all(f.type is not None for f in self.formals)

    def invoke(self, arguments: dict[str, Any]) -> Any:
        """Call the constructor with the given arguments, keyed by formal name.

        Formals absent from ``arguments`` are omitted so their defaults apply.

        Raises:
            ConstructorThrewError: If the constructor raises; the original
                exception is chained as the cause.
        """
        args = []
        kwargs = {}
        for formal in self.formals:
            if formal.name not in arguments:
                continue
            if formal.positional_only:
                args.append(arguments[formal.name])
            else:
                kwargs[formal.name] = arguments[formal.name]

        try:
            return self.func(*args, **kwargs)
        except Exception as e:
            raise ConstructorThrewError(self, e) from e

    def __str__(self):
        name = self.owner.__qualname__
        if self.func is not self.owner:
            name = f"{name}.{self.func.__name__}"
        return f"{name}({', '.join(str(f) for f in self.formals)})"


def constructor(func: Any) -> classmethod:
    """Mark a method as an alternate constructor of its class.

    The method is turned into a classmethod if it is not one already.
    """
    if isinstance(func, classmethod):
        func = func.__func__
    setattr(func, _CONSTRUCTOR_MARKER, True)
    return classmethod(func)


def class_constructors(cls: type) -> list[ClassConstructor]:
    """List the constructors of ``cls`` in a stable order.

    The primary constructor comes first, followed by the alternate
    constructors in the order they are defined on the class, then those
    inherited from its bases in method resolution order. A name defined
    on a subclass shadows the same name on its bases.

    Raises:
        InvalidTypeError: If a constructor's annotations cannot be resolved.
    """
    result = []
    primary = _primary_constructor(cls)
    if primary is not None:
        result.append(primary)

    seen: set[str] = set()
    for attr_name, attr in _attributes_in_mro_order(cls):
        if attr_name in seen:
            continue
        seen.add(attr_name)
        if isinstance(attr, classmethod) and getattr(
            attr.__func__, _CONSTRUCTOR_MARKER, False
        ):
            bound = getattr(cls, attr_name)
            result.append(
                ClassConstructor(cls, bound, _formals(cls, bound, attr.__func__))
            )

    return result


def _attributes_in_mro_order(cls: type):
    for klass in cls.__mro__:
        yield from vars(klass).items()


def _primary_constructor(cls: type) -> Optional[ClassConstructor]:
    if cls.__init__ is not object.__init__:
        annotated = cls.__init__
    else:
        annotated = cls.__new__

    try:
        return ClassConstructor(cls, cls, _formals(cls, cls, annotated))
    except (ValueError, TypeError):
        # builtins without an introspectable signature
        return None


def _formals(owner: type, func: Callable, annotated: Callable) -> tuple[Formal, ...]:
    sig = inspect.signature(func)
    try:
        hints = get_type_hints(
            annotated, localns={owner.__name__: owner}, include_extras=True
        )
    except NameError as e:
        raise InvalidTypeError(
            owner.__qualname__, f"cannot resolve constructor annotations: {e}"
        ) from e
    except TypeError:
        hints = {}

    return tuple(
        _make_formal(name, param, hints.get(name))
        for name, param in sig.parameters.items()
        if param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
    )


def _make_formal(name: str, param: inspect.Parameter, annotation: Any) -> Formal:
    return Formal(
        name,
        annotation,
        param.default is inspect.Parameter.empty,
        param.kind is inspect.Parameter.POSITIONAL_ONLY,
    )
