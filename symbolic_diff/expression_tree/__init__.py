"""Expression Tree Module

Expression trees for single-variable polynomial expressions, with
differentiation and simplification.
"""

from .expression import Expression
from .core.node import (
    Node,
    ConstantTerm,
    VariableTerm,
    SummationFunction,
    MultiplicationFunction
)
from .core.operators import NodeType, FunctionType
from .core.variables import VariableIdentifier, VariableEntity
from .factory import (
    make_constant, make_variable, make_sum, make_product, make_incidental_constant
)
from .utils import SymPyVerifier

__all__ = [
    "Expression",
    "Node", "ConstantTerm", "VariableTerm", "SummationFunction", "MultiplicationFunction",
    "NodeType", "FunctionType",
    "VariableIdentifier", "VariableEntity",
    "make_constant", "make_variable", "make_sum", "make_product", "make_incidental_constant",
    "SymPyVerifier"
]
