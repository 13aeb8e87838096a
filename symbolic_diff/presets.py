from .expression_tree import (
    Expression, make_constant, make_variable, make_sum, make_product
)


def product():
    '''
    x^3 * x^2, the expression differentiated by default.
    '''
    return Expression(make_product(make_variable("x", 3), make_variable("x", 2)))

def sum_of_powers():
    '''
    x^3 + x^2 + 4
    '''
    return Expression(make_sum([make_variable("x", 3), make_variable("x", 2), make_constant(4)]))

def power():
    '''
    x^5
    '''
    return Expression(make_variable("x", 5))

def nested():
    '''
    (x^2 + 3) * x^3, a product whose first factor is a sum.
    '''
    return Expression(make_product(
        make_sum([make_variable("x", 2), make_constant(3)]),
        make_variable("x", 3)
    ))


PRESETS = {
    'product': product,
    'sum': sum_of_powers,
    'power': power,
    'nested': nested,
}
