from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Protocol

from paramtree.constructors import constructor
from paramtree.primitives import Char, Int8


class AbstractShape(ABC):
    @abstractmethod
    def area(self) -> float:
        pass


class Named(Protocol):
    name: str


@dataclass(frozen=True)
class OneString:
    some_string: str


@dataclass(frozen=True)
class OneInteger:
    an_integer: int


@dataclass(frozen=True)
class OneFloat:
    a_float: float


@dataclass(frozen=True)
class TwoArguments:
    one: int
    two: int


class OneConstructibleArgument:
    def __init__(self, arg: OneInteger):
        self.arg = arg


class TwoConstructibleArguments:
    def __init__(self, one: OneString, two: OneInteger):
        self.one = one
        self.two = two


class TwoLevelConstructible:
    def __init__(self, level2: OneConstructibleArgument):
        self.level2 = level2


@dataclass(frozen=True)
class MixedPrimitiveAndConstructibleArguments:
    one: int
    two: OneInteger


class TwoConstructors:
    def __init__(self, one: int, two: int):
        self.one = one
        self.two = two
        self.via = "both"

    @constructor
    def from_one(cls, one: int) -> "TwoConstructors":
        instance = cls(one, 0)
        instance.via = "one"
        return instance


class Money:
    def __init__(self, cents: int):
        self.cents = cents

    @constructor
    def from_parts(cls, units: int, cents: int) -> "Money":
        return cls(units * 100 + cents)


@dataclass(frozen=True)
class Greeting:
    name: str
    salutation: str = "Hello"


class Untyped:
    def __init__(self, anything):
        self.anything = anything


class NoArguments:
    pass


class Exploding:
    def __init__(self, fuse: int):
        raise RuntimeError(f"boom after {fuse}")


@dataclass(frozen=True)
class Glyph:
    code: Int8
    symbol: Char


@dataclass(frozen=True)
class Address:
    street: str
    city: str


@dataclass(frozen=True)
class Customer:
    name: str
    address: Address


@dataclass(frozen=True)
class Order:
    number: int
    lines: list[TwoArguments]
    note: Optional[str] = None
