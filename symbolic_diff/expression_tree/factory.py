"""Construction helpers for building expression trees."""

import numbers
from typing import Iterable, List, Mapping, Tuple, Union

import numpy as np

from .core.node import Node, ConstantTerm, VariableTerm, SummationFunction, MultiplicationFunction
from .core.variables import VariableEntity
from ..exceptions import ConstructionError


def _check_value(value) -> float:
  if isinstance(value, bool) or not isinstance(value, numbers.Real):
    raise ConstructionError(f"A constant value must be a real number, got {value!r}.")
  if not np.isfinite(value):
    raise ConstructionError(f"A constant value must be finite, got {value!r}.")
  return float(value)


def _check_variable(name, exponent) -> VariableEntity:
  if not isinstance(name, str) or not name:
    raise ConstructionError('A symbolic variable name must be a non-empty string.')
  if isinstance(exponent, bool) or not isinstance(exponent, numbers.Integral):
    raise ConstructionError(f"The exponent of {name!r} must be an integer, got {exponent!r}.")
  return VariableEntity.of(name, int(exponent))


def _check_node(node, role: str) -> Node:
  if not isinstance(node, Node):
    raise ConstructionError(f"{role} must be an expression node, got {type(node).__name__}.")
  return node


def make_constant(value: float) -> ConstantTerm:
  return ConstantTerm(_check_value(value))


def make_variable(name: str, exponent: int = 1) -> VariableTerm:
  return VariableTerm(_check_variable(name, exponent))


def make_sum(terms: Iterable[Node]) -> SummationFunction:
  return SummationFunction([_check_node(term, 'A summation term') for term in terms])


def make_product(first: Node, second: Node) -> MultiplicationFunction:
  return MultiplicationFunction(_check_node(first, 'The first factor'),
                                _check_node(second, 'The second factor'))


def make_incidental_constant(
    value: float,
    variables: Union[Mapping[str, int], Iterable[Tuple[str, int]]]
) -> ConstantTerm:
  """A constant carrying variables that are not differentiated, e.g. 3*y^2.

  `variables` is either a name -> exponent mapping or (name, exponent) pairs.
  """
  pairs = variables.items() if isinstance(variables, Mapping) else variables
  entities: List[VariableEntity] = [_check_variable(name, exponent) for name, exponent in pairs]
  return ConstantTerm(_check_value(value), entities)
