"""Targets: a type handle bound to the name its parameters are addressed by."""

import inspect
import re
import types
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Generic,
    Never,
    NoReturn,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from paramtree.primitives import PrimitiveKind, primitive_kind

__all__ = [
    "Target",
    "Primitive",
    "ListOf",
    "Aggregate",
    "Invalid",
    "Classification",
]

T = TypeVar("T")

_TARGET_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_UNINHABITED = {None, type(None), NoReturn, Never, Any}


@dataclass(frozen=True)
class Primitive:
    kind: PrimitiveKind


@dataclass(frozen=True)
class ListOf:
    element: "Target"


@dataclass(frozen=True)
class Aggregate:
    cls: type


@dataclass(frozen=True)
class Invalid:
    reason: str


Classification = Union[Primitive, ListOf, Aggregate, Invalid]


@dataclass(frozen=True)
class Target(Generic[T]):
    """Binds a type handle to the name used as the dotted prefix of its parameters.

    The type handle may be a class, a ``typing.Annotated`` primitive alias,
    an ``Optional`` wrapper of either, or a parameterised ``list``.

    Attributes:
        type: The type handle to instantiate.
        name: A single identifier component; never contains dots.

    Example:
        >>> Target.create(int, "age").classify()         # Primitive(INTEGER)
        >>> Target.create(list[Order], "orders").is_list  # True
    """

    type: Any
    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not _TARGET_NAME_RE.match(self.name):
            raise ValueError(
                f"Target name must be a single identifier component, got {self.name!r}"
            )

    @classmethod
    def create(cls, type_: Any, name: str) -> "Target":
        return cls(type_, name)

    def classify(self) -> Classification:
        """Classify the type handle; total over every handle it may carry."""
        type_ = _unwrap_optional(self.type)

        kind = primitive_kind(type_)
        if kind is not None:
            return Primitive(kind)

        type_ = _unwrap_annotated(type_)
        if _is_uninhabited(type_):
            return Invalid(f"{type_!r} has no instances")
        if type_ is list:
            return Invalid("list type is not parameterised")

        origin = get_origin(type_)
        if origin is list:
            args = get_args(type_)
            if len(args) != 1:
                return Invalid("list type must have exactly one type argument")
            return ListOf(Target(args[0], self.name))
        if origin is not None:
            return Invalid(f"generic type {type_!r} is not supported")

        if not inspect.isclass(type_):
            return Invalid(f"{type_!r} is not a class")
        if getattr(type_, "_is_protocol", False):
            return Invalid(f"{type_.__name__} is a protocol")
        if inspect.isabstract(type_):
            return Invalid(f"{type_.__name__} is abstract")
        return Aggregate(type_)

    @property
    def is_primitive(self) -> bool:
        return isinstance(self.classify(), Primitive)

    @property
    def is_list(self) -> bool:
        return isinstance(self.classify(), ListOf)

    @property
    def is_abstract(self) -> bool:
        classification = self.classify()
        return isinstance(classification, Invalid) and not _is_raw_list(self.type)

    def type_argument(self) -> "Target":
        """Return the element target of a list target, bound to the same name."""
        classification = self.classify()
        if not isinstance(classification, ListOf):
            raise ValueError(f"{self} is not a parameterised list target")
        return classification.element

    def new_child(self, name: str, type_: Any) -> "Target":
        return Target(type_, name)

    def rebound(self, name: str) -> "Target":
        return Target(self.type, name)

    def __str__(self):
        return f"{_type_name(self.type)} '{self.name}'"


def _unwrap_optional(type_: Any) -> Any:
    origin = get_origin(type_)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(type_) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return type_


def _unwrap_annotated(type_: Any) -> Any:
    if get_origin(type_) is Annotated:
        return get_args(type_)[0]
    return type_


def _is_uninhabited(type_: Any) -> bool:
    try:
        return type_ in _UNINHABITED
    except TypeError:
        return False


def _is_raw_list(type_: Any) -> bool:
    type_ = _unwrap_annotated(_unwrap_optional(type_))
    return type_ is list or (get_origin(type_) is list and not get_args(type_))


def _type_name(type_: Any) -> str:
    if inspect.isclass(type_) and get_origin(type_) is None:
        return type_.__qualname__
    return repr(type_)
