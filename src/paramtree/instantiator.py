"""Recursive instantiation of object graphs from flat parameter bags.

The driver classifies a target and dispatches on the result: primitives
are decoded from the one parameter named after them, aggregates are built
by selecting a constructor and recursing into each of its formals, and
lists are built by grouping parameters into element slices.

Example:
    >>> class Point:
    ...     def __init__(self, x: int, y: int):
    ...         self.x, self.y = x, y
    >>>
    >>> point = instantiate(
    ...     Target.create(Point, "p"), Parameter("p.x", "1"), Parameter("p.y", "2")
    ... )

Preconditions:
    - The type graph reachable from a target is a tree; recursive types
      cannot be expressed by dotted names and are not supported.
    - Every element of a list supplies the same names; an element that
      omits a name merges into the next one.
"""

import logging
from typing import Any, Callable, Iterable, Optional, TypeVar, Union

from paramtree.errors import InvalidTypeError, NoConstructorFoundError
from paramtree.parameters import Parameter, Parameters
from paramtree.primitives import PrimitiveKind, convert
from paramtree.selection import ConstructorSelector
from paramtree.target import Aggregate, Invalid, ListOf, Primitive, Target

__all__ = ["Instantiator", "instantiate", "element_slices"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

Converter = Callable[[PrimitiveKind, str], Any]


class Instantiator:
    """Builds instances of targets from parameters.

    Instances hold no mutable state, so one instantiator may be shared
    between threads.

    Args:
        selector: Chooses constructors for aggregate targets.
        converter: Decodes text values into primitives.
    """

    def __init__(
        self,
        selector: Optional[ConstructorSelector] = None,
        converter: Optional[Converter] = None,
    ):
        self._selector = selector or ConstructorSelector()
        self._convert = converter or convert

    def instantiate(
        self, target: Target[T], *parameters: Union[Parameters, Parameter, Iterable[Parameter]]
    ) -> T:
        """Instantiate ``target`` from the given parameters.

        Parameters may be passed as a single :class:`Parameters`, as
        individual :class:`Parameter` objects, or as iterables of them.

        Raises:
            InstantiationError: Any failure aborts the whole instantiation.
        """
        return self._instantiate(target, Parameters(*parameters))

    def _instantiate(self, target: Target, parameters: Parameters) -> Any:
        classification = target.classify()
        logger.debug("Instantiating %s as %s", target, classification)

        if isinstance(classification, Invalid):
            raise InvalidTypeError(target, classification.reason)
        if isinstance(classification, Primitive):
            return self._instantiate_primitive(target, classification, parameters)
        if isinstance(classification, ListOf):
            return self._instantiate_list(target, classification, parameters)
        return self._instantiate_aggregate(target, classification, parameters)

    def _instantiate_primitive(
        self, target: Target, primitive: Primitive, parameters: Parameters
    ) -> Any:
        parameter = parameters.named_after(target)
        if parameter is None:
            raise NoConstructorFoundError(target, parameters.first_components())
        return self._convert(primitive.kind, parameter.value)

    def _instantiate_list(
        self, target: Target, list_of: ListOf, parameters: Parameters
    ) -> list:
        element = list_of.element
        slices = element_slices(
            parameters.for_target(target), one_per_parameter=element.is_primitive
        )
        return [
            self._instantiate(element, element_parameters.prefixed_with(target.name))
            for element_parameters in slices
        ]

    def _instantiate_aggregate(
        self, target: Target, aggregate: Aggregate, parameters: Parameters
    ) -> Any:
        scoped = parameters.for_target(target)
        chosen = self._selector.choose(aggregate.cls, scoped, target)

        supplied = scoped.first_components()
        arguments = {
            formal.name: self._instantiate(target.new_child(formal.name, formal.type), scoped)
            for formal in chosen.formals
            if formal.name in supplied
        }

        unused = scoped.not_used_by(chosen)
        if unused:
            logger.debug(
                "Ignoring parameters of %s not used by %s: %s", target, chosen, unused
            )
        return chosen.invoke(arguments)


def element_slices(
    parameters: Parameters, one_per_parameter: bool = False
) -> list[Parameters]:
    """Group scoped parameters into the slices that make up successive list elements.

    Parameters are collected in order; a slice closes when a name already
    present in it appears again with a different value, and that parameter
    opens the next slice. A name repeated with the same value stays in the
    current slice.

    Args:
        parameters: Parameters scoped to the list target.
        one_per_parameter: Put every parameter in its own slice, as for a
            list of primitives.

    Example:
        >>> element_slices(Parameters(
        ...     Parameter("one", "1"), Parameter("two", "2"),
        ...     Parameter("one", "11"), Parameter("two", "22"),
        ... ))
        >>> # Returns [Parameters(one=1, two=2), Parameters(one=11, two=22)]
    """
    slices: list[Parameters] = []
    current: list[Parameter] = []
    seen: dict[str, str] = {}

    for parameter in parameters:
        repeated = seen.get(parameter.name, parameter.value) != parameter.value
        if current and (one_per_parameter or repeated):
            slices.append(Parameters(current))
            current, seen = [], {}
        current.append(parameter)
        seen.setdefault(parameter.name, parameter.value)

    if current:
        slices.append(Parameters(current))
    return slices


_default_instantiator = Instantiator()


def instantiate(
    target: Target[T], *parameters: Union[Parameters, Parameter, Iterable[Parameter]]
) -> T:
    """Instantiate ``target`` with a default :class:`Instantiator`."""
    return _default_instantiator.instantiate(target, *parameters)
