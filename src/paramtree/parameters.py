"""Flat bags of dotted-name parameters, and the algebra for scoping them.

A parameter bag is what a form-binding layer hands over: an ordered
multiset of ``name=value`` pairs where each name is a dotted path such as
``order.customer.name``. Scoping a bag to a target keeps only the
parameters whose first component is the target's name, with that
component stripped, so a recursive call sees only what belongs to it.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

from paramtree.errors import AmbiguousParameterError

__all__ = [
    "Parameter",
    "Parameters",
    "first_component",
    "stripped_of_first_component",
]

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def first_component(name: str) -> str:
    """Return the part of a dotted name before the first dot.

    Example:
        >>> first_component("root.one.two")  # Returns "root"
        >>> first_component("root")          # Returns "root"
    """
    head, _, _ = name.partition(".")
    return head


def stripped_of_first_component(name: str) -> str:
    """Return the part of a dotted name after the first dot, or "" if there is none."""
    _, _, rest = name.partition(".")
    return rest


@dataclass(frozen=True)
class Parameter:
    """A single ``(name, value)`` pair.

    The empty name is the scoped form of a parameter that matched a target
    by its whole name; it is the sole payload of a primitive child.

    Attributes:
        name: A dotted path of identifier components.
        value: The raw text value.
    """

    name: str
    value: str

    def __post_init__(self):
        if self.name and not _NAME_RE.match(self.name):
            raise ValueError(f"Malformed parameter name {self.name!r}")
        if not isinstance(self.value, str):
            raise TypeError(
                f"Value of parameter {self.name!r} must be text, got {self.value!r}"
            )

    @property
    def first_component(self) -> str:
        return first_component(self.name)

    def stripped_of_first_component(self) -> "Parameter":
        return Parameter(stripped_of_first_component(self.name), self.value)

    def prefixed_with(self, name: str) -> "Parameter":
        """Return this parameter nested one level under ``name``."""
        return Parameter(f"{name}.{self.name}" if self.name else name, self.value)


class Parameters:
    """An insertion-ordered multiset of :class:`Parameter`.

    Parameters are immutable; every scoping operation returns a new bag.
    """

    def __init__(self, *parameters: Union[Parameter, Iterable[Parameter]]):
        collected: list[Parameter] = []
        for item in parameters:
            if isinstance(item, Parameter):
                collected.append(item)
            else:
                collected.extend(item)
        self._parameters = tuple(collected)

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Union[str, Iterable[str]]]
    ) -> "Parameters":
        """Build a bag from a mapping of names to one or many text values.

        This accepts the shape produced by ``urllib.parse.parse_qs`` as
        well as plain ``{name: value}`` dictionaries.

        Example:
            >>> Parameters.from_mapping({"r.one": ["1", "11"], "r.two": "2"})
        """
        collected = []
        for name, values in mapping.items():
            if isinstance(values, str):
                collected.append(Parameter(name, values))
            else:
                collected.extend(Parameter(name, value) for value in values)
        return cls(collected)

    def named_after(self, target: Any) -> Optional[Parameter]:
        """Find the one parameter that supplies a value for ``target``.

        A parameter is a candidate when its first component equals the
        target's name. Several candidates are tolerated only when they all
        carry exactly the target's name and agree on their value.

        Returns:
            The matching parameter, or None when no parameter matches.

        Raises:
            AmbiguousParameterError: If more than one distinct parameter matches.
        """
        matching = [p for p in self._parameters if p.first_component == target.name]
        if not matching:
            return None
        if len(matching) == 1:
            return matching[0]

        whole_names = all(p.name == target.name for p in matching)
        if whole_names and len({p.value for p in matching}) == 1:
            return matching[0]

        raise AmbiguousParameterError(target.name, matching)

    def for_target(self, target: Any) -> "Parameters":
        """Return the parameters belonging to ``target``, with its name stripped."""
        return Parameters(
            p.stripped_of_first_component()
            for p in self._parameters
            if p.first_component == target.name
        )

    def not_used_by(self, constructor: Any) -> "Parameters":
        """Return the parameters that no formal argument of ``constructor`` consumes."""
        used = set(constructor.formal_names)
        return Parameters(p for p in self._parameters if p.first_component not in used)

    def prefixed_with(self, name: str) -> "Parameters":
        return Parameters(p.prefixed_with(name) for p in self._parameters)

    def first_components(self) -> set[str]:
        return {p.first_component for p in self._parameters}

    def get_parameters_list(self) -> list[Parameter]:
        return list(self._parameters)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __bool__(self) -> bool:
        return bool(self._parameters)

    def __add__(self, other: "Parameters") -> "Parameters":
        if not isinstance(other, Parameters):
            return NotImplemented
        return Parameters(self._parameters, other._parameters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameters):
            return NotImplemented
        return self._parameters == other._parameters

    def __hash__(self) -> int:
        return hash(self._parameters)

    def __repr__(self) -> str:
        return f"Parameters({', '.join(repr(p) for p in self._parameters)})"
