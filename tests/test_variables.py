from symbolic_diff.expression_tree.core.variables import VariableIdentifier, VariableEntity


def test_rendering_omits_unit_exponent():
    assert VariableEntity.of("x").to_string() == "x"
    assert VariableEntity.of("x", 2).to_string() == "x^2"
    assert VariableEntity.of("x", -1).to_string() == "x^-1"
    assert VariableEntity.of("y", 0).to_string() == "y^0"


def test_identifiers_order_by_name():
    assert VariableIdentifier("a") < VariableIdentifier("b")
    assert VariableIdentifier("x") == VariableIdentifier("x")


def test_entities_sort_by_name_not_exponent():
    entities = [VariableEntity.of("z", 1), VariableEntity.of("a", 5), VariableEntity.of("m", 0)]
    assert [e.name for e in sorted(entities)] == ["a", "m", "z"]
    assert not (VariableEntity.of("x", 1) < VariableEntity.of("x", 9))


def test_equality_is_structural():
    assert VariableEntity.of("x", 2) == VariableEntity.of("x", 2)
    assert VariableEntity.of("x", 2) != VariableEntity.of("x", 3)
    assert VariableEntity.of("x", 2).same_variable(VariableEntity.of("x", 3))
    assert not VariableEntity.of("x", 2).same_variable(VariableEntity.of("y", 2))


def test_with_exponent_keeps_identifier():
    var = VariableEntity.of("t", 4).with_exponent(3)
    assert var.name == "t"
    assert var.exponent == 3
