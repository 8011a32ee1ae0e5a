"""Choosing which constructor of a class to invoke for a set of parameters."""

import logging
from typing import Any, Callable, Optional

from paramtree.constructors import ClassConstructor, class_constructors
from paramtree.errors import NoConstructorFoundError
from paramtree.parameters import Parameters

__all__ = ["ConstructorSelector"]

logger = logging.getLogger(__name__)


class ConstructorSelector:
    """Pick the constructor whose formal names best match the supplied names.

    A constructor is applicable when each of its required formals is
    witnessed by a first component of the scoped parameters and all of its
    formals are annotated. Among the applicable constructors the one with
    the most witnessed formals wins; ties go to the earliest constructor.
    A constructor that consumes no parameter is only chosen when no
    parameters were supplied.
    """

    def __init__(
        self,
        constructors_of: Optional[Callable[[type], list[ClassConstructor]]] = None,
    ):
        self._constructors_of = constructors_of or class_constructors

    def choose(
        self, cls: type, parameters: Parameters, target: Any = None
    ) -> ClassConstructor:
        """Select a constructor of ``cls`` for parameters already scoped to it.

        Args:
            cls: The aggregate class to construct.
            parameters: Parameters scoped to the target being built.
            target: The target, used for error context only.

        Returns:
            The chosen constructor.

        Raises:
            NoConstructorFoundError: If no constructor is applicable.
        """
        supplied = parameters.first_components()
        candidates = self._constructors_of(cls)

        best: Optional[ClassConstructor] = None
        best_score = -1
        for candidate in candidates:
            score = _witnessed_formals(candidate, supplied)
            if score is None:
                continue
            if score == 0 and supplied:
                continue
            if score > best_score:
                best, best_score = candidate, score

        if best is None:
            raise NoConstructorFoundError(
                target if target is not None else cls.__qualname__,
                supplied,
                candidates,
            )

        logger.debug("Chose constructor %s for parameters %s", best, sorted(supplied))
        return best


def _witnessed_formals(candidate: ClassConstructor, supplied: set[str]) -> Optional[int]:
    """Return how many formals ``supplied`` witnesses, or None if ``candidate`` is inapplicable."""
    if not candidate.is_typed:
        return None
    if not candidate.required_names <= supplied:
        return None
    return sum(1 for name in candidate.formal_names if name in supplied)
