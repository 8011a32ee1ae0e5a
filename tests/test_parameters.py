import pytest

from paramtree.constructors import class_constructors
from paramtree.errors import AmbiguousParameterError
from paramtree.parameters import (
    Parameter,
    Parameters,
    first_component,
    stripped_of_first_component,
)
from paramtree.target import Target

from fixtures import TwoArguments


@pytest.fixture
def target() -> Target:
    return Target.create(object, "name")


def parameters_named(*names: str) -> Parameters:
    return Parameters(Parameter(name, "") for name in names)


def test_first_component_of_dotted_and_plain_names():
    assert first_component("root.one.two") == "root"
    assert first_component("root") == "root"
    assert stripped_of_first_component("root.one.two") == "one.two"
    assert stripped_of_first_component("root") == ""


def test_named_after_returns_parameter_whose_first_component_is_the_target_name(target):
    correct = Parameter("name.asdf", "")
    incorrect = Parameter("otherName.asdf", "")

    assert Parameters(correct, incorrect).named_after(target) == correct


def test_named_after_returns_parameter_with_the_whole_target_name(target):
    correct = Parameter("name", "")
    incorrect = Parameter("otherName", "")

    assert Parameters(correct, incorrect).named_after(target) == correct


def test_named_after_raises_if_more_than_one_parameter_begins_with_the_target_name(target):
    parameters = Parameters(Parameter("name", "one"), Parameter("name", "two"))

    with pytest.raises(AmbiguousParameterError, match="named after 'name'") as raised:
        parameters.named_after(target)
    assert raised.value.name == "name"
    assert len(raised.value.parameters) == 2


def test_named_after_tolerates_repeated_whole_names_with_one_value(target):
    parameters = Parameters(Parameter("name", "same"), Parameter("name", "same"))

    assert parameters.named_after(target) == Parameter("name", "same")


def test_named_after_raises_for_several_sub_paths(target):
    parameters = Parameters(Parameter("name.a", "1"), Parameter("name.b", "1"))

    with pytest.raises(AmbiguousParameterError):
        parameters.named_after(target)


def test_named_after_returns_none_if_no_parameter_begins_with_the_target_name(target):
    parameters = Parameters(Parameter("fizzble", "one"), Parameter("foozble", "two"))

    assert parameters.named_after(target) is None


def test_for_target_keeps_matching_parameters_and_strips_the_target_name(target):
    parameters = Parameters(
        Parameter("name.first", "1"),
        Parameter("other.first", "2"),
        Parameter("name", "3"),
        Parameter("name.deep.er", "4"),
    )

    assert parameters.for_target(target).get_parameters_list() == [
        Parameter("first", "1"),
        Parameter("", "3"),
        Parameter("deep.er", "4"),
    ]


def test_parameters_not_used_by_a_constructor_are_those_not_matching_its_formal_names():
    parameters = parameters_named("foo", "one", "two", "fizzle")
    two_arguments = class_constructors(TwoArguments)[0]

    not_used = parameters.not_used_by(two_arguments)
    assert set(not_used.get_parameters_list()) == {
        Parameter("foo", ""),
        Parameter("fizzle", ""),
    }


def test_from_mapping_accepts_single_and_multiple_values():
    parameters = Parameters.from_mapping({"r.one": ["1", "11"], "r.two": "2"})

    assert parameters.get_parameters_list() == [
        Parameter("r.one", "1"),
        Parameter("r.one", "11"),
        Parameter("r.two", "2"),
    ]


def test_parameters_can_be_built_from_iterables_and_concatenated():
    first = Parameters([Parameter("a", "1")])
    second = Parameters(Parameter("b", "2"), [Parameter("c", "3")])

    combined = first + second
    assert len(combined) == 3
    assert [p.name for p in combined] == ["a", "b", "c"]
    assert combined == Parameters(first, second)


def test_prefixed_with_nests_every_parameter_under_a_name():
    parameters = Parameters(Parameter("", "1"), Parameter("one", "2"))

    assert parameters.prefixed_with("root").get_parameters_list() == [
        Parameter("root", "1"),
        Parameter("root.one", "2"),
    ]


@pytest.mark.parametrize("name", [".a", "a.", "a..b", "1a", "a-b", "a[0]"])
def test_malformed_parameter_names_are_rejected(name):
    with pytest.raises(ValueError, match="Malformed parameter name"):
        Parameter(name, "x")


def test_parameter_equality_is_by_name_and_value():
    assert Parameter("a.b", "1") == Parameter("a.b", "1")
    assert Parameter("a.b", "1") != Parameter("a.b", "2")


def test_non_text_values_are_rejected_with_a_type_error():
    with pytest.raises(TypeError, match="must be text"):
        Parameter("a", 1)
