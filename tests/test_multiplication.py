import numpy as np

from symbolic_diff import (
    ConstantTerm, VariableTerm, VariableEntity, MultiplicationFunction, SummationFunction,
    SymPyVerifier, make_constant, make_product, make_sum, make_variable
)


def test_render_drops_unit_operand():
    assert make_product(make_constant(1), make_variable("x", 2)).to_string() == "x^2"
    assert make_product(make_variable("x", 2), make_constant(1)).to_string() == "x^2"
    assert make_product(make_constant(3), make_variable("x", 2)).to_string() == "3*x^2"


def test_simplify_folds_constants():
    simplified = make_product(make_constant(3), make_constant(4)).simplify()
    assert simplified.first == ConstantTerm(12)
    assert simplified.second == ConstantTerm(1)
    assert simplified.to_string() == "12"


def test_simplify_folds_variables():
    simplified = make_product(make_variable("x", 3), make_variable("x", 2)).simplify()
    assert simplified.first == VariableTerm(VariableEntity.of("x", 5), [ConstantTerm(1)])
    assert simplified.second == ConstantTerm(1)
    assert simplified.to_string() == "x^5"


def test_simplify_absorbs_zero():
    simplified = make_product(make_variable("x", 3), make_constant(0)).simplify()
    assert simplified.first.to_string() == "0"
    assert simplified.second.to_string() == "0"


def test_simplify_absorbs_nested_zero():
    inner = make_product(make_constant(0), make_variable("x", 1))
    simplified = make_product(make_sum([make_variable("x", 2)]), inner).simplify()
    assert simplified.first == ConstantTerm(0)
    assert simplified.second == ConstantTerm(0)


def test_simplify_keeps_function_pairs():
    left = make_sum([make_variable("x", 1), make_constant(1)])
    right = make_sum([make_variable("x", 1), make_constant(2)])
    simplified = make_product(left, right).simplify()
    assert isinstance(simplified.first, SummationFunction)
    assert isinstance(simplified.second, SummationFunction)


def test_simplify_is_idempotent():
    for expr in (
        make_product(make_variable("x", 3), make_variable("x", 2)),
        make_product(make_constant(2), make_constant(0)),
        make_product(make_constant(2), make_variable("x", 4)),
    ):
        once = expr.simplify()
        assert once.simplify() == once


def test_differentiate_product_of_powers():
    derivative = make_product(make_variable("x", 3), make_variable("x", 2)).differentiate()
    assert isinstance(derivative, SummationFunction)
    assert derivative.to_string() == "5*x^4"


def test_differentiate_constant_times_power():
    expr = make_product(make_constant(3), make_variable("x", 2))
    derivative = expr.differentiate()
    X = np.linspace(-2.0, 2.0, 9)
    np.testing.assert_allclose(derivative.evaluate(X), 6.0 * X)
    assert SymPyVerifier().verify_derivative(expr, derivative)


def test_differentiate_product_of_sums():
    expr = make_product(
        make_sum([make_variable("x", 1), make_constant(1)]),
        make_sum([make_variable("x", 2), make_constant(2)])
    )
    derivative = expr.differentiate()
    X = np.array([-1.5, 0.0, 0.5, 2.0])
    # d/dx (x + 1)(x^2 + 2) = 3x^2 + 2x + 2
    np.testing.assert_allclose(derivative.evaluate(X), 3 * X ** 2 + 2 * X + 2)


def test_differentiate_does_not_mutate_receiver():
    expr = make_product(make_variable("x", 3), make_variable("x", 2))
    expr.differentiate()
    assert isinstance(expr.first, VariableTerm)
    assert expr.first.variable.exponent == 3
    assert expr.second.variable.exponent == 2


def test_is_one():
    assert MultiplicationFunction(ConstantTerm(1), ConstantTerm(1)).is_one()
    assert not MultiplicationFunction(ConstantTerm(1), ConstantTerm(2)).is_one()
