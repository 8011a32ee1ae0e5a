"""Paramtree: build typed object graphs from flat dotted-name parameters.

Paramtree turns the parameter bags produced by HTTP forms and query strings
into statically typed object trees. Each parameter is a ``dotted.path=value``
pair; the first component of the path names a target, and the rest of the
path is handed down to the constructor arguments of that target's type.

Key Features:
    - Constructor-only binding, choosing among a class's constructors by the
      names the parameters supply
    - Primitive decoding for integers, floats, booleans, characters,
      strings and decimals, including fixed-width integer aliases
    - Nested aggregates and lists without index syntax
    - No global state; instantiators are safe to share

Basic Usage:
    >>> from paramtree.instantiator import instantiate
    >>> from paramtree.parameters import Parameter
    >>> from paramtree.target import Target
    >>>
    >>> class Customer:
    ...     def __init__(self, name: str, age: int):
    ...         self.name, self.age = name, age
    >>>
    >>> customer = instantiate(
    ...     Target.create(Customer, "customer"),
    ...     Parameter("customer.name", "Arthur"),
    ...     Parameter("customer.age", "42"),
    ... )

The library consists of several core modules:
    - parameters: Parameter bags and the scoping algebra over dotted names
    - target: Type descriptors and their classification
    - primitives: Primitive kinds and text decoding
    - constructors: Constructor introspection and the @constructor decorator
    - selection: Choosing a constructor for a set of parameters
    - instantiator: The recursive instantiation driver
    - errors: Library-specific exceptions
"""
