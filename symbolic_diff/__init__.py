# Python

"""Symbolic Differentiation Package

Builds expression trees for single-variable polynomial expressions and
differentiates them, simplifying the result into a reduced form.
"""

from .expression_tree import (
  Expression, Node, ConstantTerm, VariableTerm,
  SummationFunction, MultiplicationFunction,
  NodeType, FunctionType, VariableIdentifier, VariableEntity,
  make_constant, make_variable, make_sum, make_product, make_incidental_constant,
  SymPyVerifier
)
from .config import EngineConfig, get_config, set_config, configure
from .exceptions import (
  SymbolicDiffException, SymbolicDiffInternalException, ConstructionError,
  IncompatibleTermsError, MultipleVariablesError, UnexpectedKindError, EvaluationError
)
from .logging_system import LogLevel, get_logger, configure_logging, set_log_level, log_info

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "ConstantTerm", "VariableTerm",
  "SummationFunction", "MultiplicationFunction",
  "NodeType", "FunctionType", "VariableIdentifier", "VariableEntity",
  "make_constant", "make_variable", "make_sum", "make_product", "make_incidental_constant",
  "SymPyVerifier",
  "EngineConfig", "get_config", "set_config", "configure",
  "SymbolicDiffException", "SymbolicDiffInternalException", "ConstructionError",
  "IncompatibleTermsError", "MultipleVariablesError", "UnexpectedKindError", "EvaluationError",
  "LogLevel", "get_logger", "configure_logging", "set_log_level", "log_info"
]
