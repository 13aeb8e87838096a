"""Core expression tree components."""

from .node import (
    Node, ConstantTerm, VariableTerm, SummationFunction, MultiplicationFunction,
    collect_variables, format_value
)
from .operators import (
    NodeType, FunctionType, FUNCTION_SEPARATORS,
    evaluate_constant, evaluate_power, evaluate_sum, evaluate_product
)
from .variables import VariableIdentifier, VariableEntity

__all__ = [
    'Node', 'ConstantTerm', 'VariableTerm', 'SummationFunction', 'MultiplicationFunction',
    'collect_variables', 'format_value',
    'NodeType', 'FunctionType', 'FUNCTION_SEPARATORS',
    'evaluate_constant', 'evaluate_power', 'evaluate_sum', 'evaluate_product',
    'VariableIdentifier', 'VariableEntity'
]
