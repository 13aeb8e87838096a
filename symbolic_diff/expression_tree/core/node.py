import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Dict, List, Tuple, Iterable
from .operators import (
  NodeType, FunctionType, FUNCTION_SEPARATORS,
  evaluate_constant, evaluate_power, evaluate_sum, evaluate_product
)
from .variables import VariableEntity
from ...config import get_config
from ...exceptions import (
  EvaluationError, IncompatibleTermsError, MultipleVariablesError,
  SymbolicDiffInternalException, UnexpectedKindError
)
from ...logging_system import log_debug


def format_value(value: float) -> str:
  """Integral values render without a fractional part (3.0 -> '3')."""
  if np.isfinite(value) and float(value).is_integer():
    return str(int(value))
  return repr(float(value))


def sympy_number(value: float) -> sp.Expr:
  if np.isfinite(value) and float(value).is_integer():
    return sp.Integer(int(value))
  return sp.Float(value)


def collect_variables(variables: Iterable[VariableEntity]) -> List[VariableEntity]:
  """Group entities by name summing exponents, sorted by name. Zero powers are kept."""
  powers: Dict = {}
  for var in variables:
    powers[var.identifier] = powers.get(var.identifier, 0) + var.exponent
  return sorted(VariableEntity(identifier, power) for identifier, power in powers.items())


def as_samples(X) -> np.ndarray:
  return np.atleast_1d(np.asarray(X, dtype=np.float64))


class Node(ABC):
  """Base node of an expression tree.

  Nodes are treated as immutable once built: simplify and differentiate
  return new trees, so the cached hash and size never go stale.
  """

  __slots__ = ('_hash_cache', '_size_cache')

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None

  @abstractmethod
  def kind(self) -> NodeType:
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def differentiate(self) -> 'Node':
    pass

  @abstractmethod
  def simplify(self) -> 'Node':
    pass

  @abstractmethod
  def copy(self) -> 'Node':
    pass

  @abstractmethod
  def children(self) -> List['Node']:
    pass

  @abstractmethod
  def is_zero(self) -> bool:
    pass

  @abstractmethod
  def is_one(self) -> bool:
    pass

  @abstractmethod
  def evaluate(self, X: np.ndarray, bindings: Optional[Dict[str, float]] = None) -> np.ndarray:
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  @abstractmethod
  def _structure_key(self) -> tuple:
    pass

  def can_merge_with(self, other: 'Node') -> bool:
    return False

  def add(self, other: 'Node') -> 'Node':
    raise UnexpectedKindError(f"add is not defined for {self.kind().name} nodes ({type(self).__name__})")

  def multiply(self, other: 'Node') -> 'Node':
    raise UnexpectedKindError(f"multiply is not defined for {self.kind().name} nodes ({type(self).__name__})")

  def size(self) -> int:
    if self._size_cache is None:
      self._size_cache = 1 + sum(child.size() for child in self.children())
    return self._size_cache

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = hash(self._structure_key())
    return self._hash_cache

  def __eq__(self, other) -> bool:
    if not isinstance(other, Node):
      return NotImplemented
    return type(self) is type(other) and self._structure_key() == other._structure_key()

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.to_string()!r})"


def _expect(operation: str, receiver: Node, other: Node, cls: type):
  if not isinstance(other, cls):
    other_kind = other.kind().name if isinstance(other, Node) else type(other).__name__
    raise UnexpectedKindError(
      f"{operation}: {type(receiver).__name__} cannot combine with {other_kind} operand"
    )


class ConstantTerm(Node):
  """A numeric coefficient times incidental variables, e.g. 3*y^2*z."""

  __slots__ = ('value', 'non_wrt_variables')

  def __init__(self, value: float, non_wrt_variables: Optional[List[VariableEntity]] = None):
    super().__init__()
    self.value = float(value)
    self.non_wrt_variables = list(non_wrt_variables or [])

  def kind(self) -> NodeType:
    return NodeType.CONSTANT

  def can_merge_with(self, other: Node) -> bool:
    if not isinstance(other, ConstantTerm):
      return False
    return collect_variables(self.non_wrt_variables) == collect_variables(other.non_wrt_variables)

  def add(self, other: Node) -> 'ConstantTerm':
    _expect('add', self, other, ConstantTerm)
    if not self.can_merge_with(other):
      raise IncompatibleTermsError(
        f"add: constant terms {self.to_string()!r} and {other.to_string()!r} "
        "carry different incidental variables"
      )
    return ConstantTerm(self.value + other.value, self.non_wrt_variables)

  def multiply(self, other: Node) -> 'ConstantTerm':
    _expect('multiply', self, other, ConstantTerm)
    variables = collect_variables(self.non_wrt_variables + other.non_wrt_variables)
    return ConstantTerm(self.value * other.value, variables)

  def simplify(self) -> 'ConstantTerm':
    return ConstantTerm(self.value, collect_variables(self.non_wrt_variables))

  def differentiate(self) -> 'ConstantTerm':
    return ConstantTerm(0.0)

  def to_string(self) -> str:
    if self.is_zero():
      return "0"
    parts = [format_value(self.value)]
    parts.extend(var.to_string() for var in self.non_wrt_variables)
    return "*".join(parts)

  def copy(self) -> 'ConstantTerm':
    return ConstantTerm(self.value, self.non_wrt_variables)

  def children(self) -> List[Node]:
    return []

  def is_zero(self) -> bool:
    return get_config().is_close(self.value, 0.0)

  def is_one(self) -> bool:
    return (get_config().is_close(self.value, 1.0) and
            all(var.exponent == 0 for var in self.non_wrt_variables))

  def evaluate(self, X: np.ndarray, bindings: Optional[Dict[str, float]] = None) -> np.ndarray:
    X = as_samples(X)
    result = evaluate_constant(X.shape[0], self.value)
    for var in self.non_wrt_variables:
      if bindings is None or var.name not in bindings:
        raise EvaluationError(f"evaluate: no value bound for incidental variable {var.name!r}")
      factor = evaluate_power(evaluate_constant(X.shape[0], float(bindings[var.name])), var.exponent)
      result = evaluate_product(result, factor)
    return result

  def to_sympy(self) -> sp.Expr:
    factors = [sympy_number(self.value)]
    factors.extend(sp.Pow(sp.Symbol(var.name), var.exponent) for var in self.non_wrt_variables)
    return sp.Mul(*factors)

  def _structure_key(self) -> tuple:
    return (type(self).__name__, self.value, tuple(self.non_wrt_variables))


class VariableTerm(Node):
  """coeff_1 * ... * coeff_n * x^k where x is the differentiation variable."""

  __slots__ = ('variable', 'coeffs')

  def __init__(self, variable: VariableEntity, coeffs: Optional[List[Node]] = None):
    super().__init__()
    self.variable = variable
    self.coeffs = list(coeffs or [])

  def kind(self) -> NodeType:
    return NodeType.VARIABLE

  def folded_constant(self) -> ConstantTerm:
    """Product of every constant coefficient (1 if there are none)."""
    product = ConstantTerm(1.0)
    for coeff in self.coeffs:
      if coeff.kind() == NodeType.CONSTANT:
        product = product.multiply(coeff)
    return product

  def _non_constant_coeffs(self) -> List[Node]:
    return [coeff for coeff in self.coeffs if coeff.kind() != NodeType.CONSTANT]

  def can_merge_with(self, other: Node) -> bool:
    if not isinstance(other, VariableTerm) or self.variable != other.variable:
      return False

    mine = self._non_constant_coeffs()
    theirs = other._non_constant_coeffs()
    if len(mine) != len(theirs):
      return False

    for a, b in zip(mine, theirs):
      if a.kind() != b.kind():
        return False
      if a.kind() == NodeType.VARIABLE and not a.can_merge_with(b):
        return False
      if a.kind() == NodeType.FUNCTION and a.simplify() != b.simplify():
        return False

    return self.folded_constant().can_merge_with(other.folded_constant())

  def add(self, other: Node) -> 'VariableTerm':
    _expect('add', self, other, VariableTerm)
    if not self.can_merge_with(other):
      raise IncompatibleTermsError(
        f"add: variable terms {self.to_string()!r} and {other.to_string()!r} are not like terms"
      )
    constant = self.folded_constant().add(other.folded_constant())
    coeffs = [coeff.copy() for coeff in self._non_constant_coeffs()]
    return VariableTerm(self.variable, coeffs + [constant])

  def multiply(self, other: Node) -> 'VariableTerm':
    _expect('multiply', self, other, VariableTerm)
    if not self.variable.same_variable(other.variable):
      raise MultipleVariablesError(
        f"multiply: cannot combine variable {self.variable.name!r} with {other.variable.name!r}"
      )
    exponent, functions, product = self._fold(
      self.coeffs + other.coeffs,
      self.variable.exponent + other.variable.exponent,
      'multiply'
    )
    coeffs = [function.copy() for function in functions]
    return VariableTerm(self.variable.with_exponent(exponent), coeffs + [product])

  def _fold(self, coeffs: List[Node], exponent: int, operation: str) -> Tuple[int, List[Node], ConstantTerm]:
    """Split coefficients into (exponent, functions, constant product).

    Nested variable coefficients contribute their exponent and their own
    coefficients; they must name the active variable.
    """
    product = ConstantTerm(1.0)
    functions: List[Node] = []

    for coeff in coeffs:
      kind = coeff.kind()
      if kind == NodeType.CONSTANT:
        product = product.multiply(coeff)
      elif kind == NodeType.VARIABLE:
        if not coeff.variable.same_variable(self.variable):
          raise MultipleVariablesError(
            f"{operation}: nested variable {coeff.variable.name!r} differs from "
            f"active variable {self.variable.name!r} in VariableTerm"
          )
        log_debug(f"{operation}: folding {coeff.to_string()} into {self.variable.name}^{exponent}")
        exponent, nested_functions, nested_product = self._fold(
          coeff.coeffs, exponent + coeff.variable.exponent, operation
        )
        functions.extend(nested_functions)
        product = product.multiply(nested_product)
      else:
        functions.append(coeff)

    return exponent, functions, product.simplify()

  def simplify(self) -> 'VariableTerm':
    coeffs = [coeff.simplify() for coeff in self.coeffs]
    exponent, functions, product = self._fold(coeffs, self.variable.exponent, 'simplify')
    return VariableTerm(self.variable.with_exponent(exponent), functions + [product])

  def differentiate(self) -> 'VariableTerm':
    exponent = self.variable.exponent
    coeffs = [ConstantTerm(float(exponent))] + [coeff.copy() for coeff in self.coeffs]
    return VariableTerm(self.variable.with_exponent(exponent - 1), coeffs)

  def to_string(self) -> str:
    if self.is_zero():
      return "0"
    parts = [coeff.to_string() for coeff in self.coeffs if not coeff.is_one()]
    if self.variable.exponent != 0:
      parts.append(self.variable.to_string())
    if not parts:
      return "1"
    return "*".join(parts)

  def copy(self) -> 'VariableTerm':
    return VariableTerm(self.variable, [coeff.copy() for coeff in self.coeffs])

  def children(self) -> List[Node]:
    return list(self.coeffs)

  def is_zero(self) -> bool:
    return any(coeff.is_zero() for coeff in self.coeffs)

  def is_one(self) -> bool:
    return self.variable.exponent == 0 and all(coeff.is_one() for coeff in self.coeffs)

  def evaluate(self, X: np.ndarray, bindings: Optional[Dict[str, float]] = None) -> np.ndarray:
    X = as_samples(X)
    result = evaluate_power(X, self.variable.exponent)
    for coeff in self.coeffs:
      result = evaluate_product(result, coeff.evaluate(X, bindings))
    return result

  def to_sympy(self) -> sp.Expr:
    factors = [coeff.to_sympy() for coeff in self.coeffs]
    factors.append(sp.Pow(sp.Symbol(self.variable.name), self.variable.exponent))
    return sp.Mul(*factors)

  def _structure_key(self) -> tuple:
    return (type(self).__name__, self.variable, tuple(coeff._structure_key() for coeff in self.coeffs))


def _swap_remove(items: list, index: int):
  """Remove items[index] by moving the last element into its slot."""
  last = items.pop()
  if index < len(items):
    removed = items[index]
    items[index] = last
    return removed
  return last


class SummationFunction(Node):
  __slots__ = ('terms',)

  function_type = FunctionType.SUMMATION

  def __init__(self, terms: Optional[List[Node]] = None):
    super().__init__()
    self.terms = list(terms or [])

  def kind(self) -> NodeType:
    return NodeType.FUNCTION

  def to_string(self) -> str:
    rendered = [term.to_string() for term in self.terms if not term.is_zero()]
    return FUNCTION_SEPARATORS[self.function_type].join(rendered)

  def differentiate(self) -> 'SummationFunction':
    simplified = self.simplify()
    derivatives = [term.differentiate() for term in simplified.terms]
    return SummationFunction(derivatives).simplify()

  @staticmethod
  def _find_mergeable_pair(terms: List[Node]) -> Optional[Tuple[int, int]]:
    for i in range(len(terms)):
      for j in range(len(terms)):
        if i == j or terms[i].kind() != terms[j].kind():
          continue
        if terms[i].can_merge_with(terms[j]):
          return i, j
    return None

  def simplify(self) -> 'SummationFunction':
    terms = [term.simplify() for term in self.terms]
    max_merges = get_config().max_merge_passes
    merges = 0

    # Each merge removes one term, so the loop ends after at most len(terms) - 1 merges
    while True:
      pair = self._find_mergeable_pair(terms)
      if pair is None:
        break
      if max_merges is not None and merges >= max_merges:
        raise SymbolicDiffInternalException(
          f"simplify: SummationFunction exceeded {max_merges} merges"
        )

      i, j = pair
      first, second = terms[i], terms[j]
      _swap_remove(terms, i)
      # If j was the last slot, its element now sits at i
      _swap_remove(terms, i if j == len(terms) else j)

      merged = first.add(second)
      log_debug(f"simplify: merged {first.to_string()!r} and {second.to_string()!r} into {merged.to_string()!r}")
      terms.insert(0, merged)
      merges += 1

    return SummationFunction(terms)

  def copy(self) -> 'SummationFunction':
    return SummationFunction([term.copy() for term in self.terms])

  def children(self) -> List[Node]:
    return list(self.terms)

  def is_zero(self) -> bool:
    return all(term.is_zero() for term in self.terms)

  def is_one(self) -> bool:
    remaining = [term for term in self.terms if not term.is_zero()]
    return len(remaining) == 1 and remaining[0].is_one()

  def evaluate(self, X: np.ndarray, bindings: Optional[Dict[str, float]] = None) -> np.ndarray:
    X = as_samples(X)
    result = evaluate_constant(X.shape[0], 0.0)
    for term in self.terms:
      result = evaluate_sum(result, term.evaluate(X, bindings))
    return result

  def to_sympy(self) -> sp.Expr:
    return sp.Add(*[term.to_sympy() for term in self.terms])

  def _structure_key(self) -> tuple:
    return (type(self).__name__, tuple(term._structure_key() for term in self.terms))


class MultiplicationFunction(Node):
  __slots__ = ('first', 'second')

  function_type = FunctionType.MULTIPLICATION

  def __init__(self, first: Node, second: Node):
    super().__init__()
    self.first = first
    self.second = second

  def kind(self) -> NodeType:
    return NodeType.FUNCTION

  def to_string(self) -> str:
    if self.first.is_one():
      return self.second.to_string()
    if self.second.is_one():
      return self.first.to_string()
    separator = FUNCTION_SEPARATORS[self.function_type]
    return f"{self.first.to_string()}{separator}{self.second.to_string()}"

  def differentiate(self) -> SummationFunction:
    simplified = self.simplify()
    first, second = simplified.first, simplified.second
    products = [
      MultiplicationFunction(first.copy(), second.differentiate()),
      MultiplicationFunction(second.copy(), first.differentiate()),
    ]
    return SummationFunction(products).simplify()

  def simplify(self) -> 'MultiplicationFunction':
    first = self.first.simplify()
    second = self.second.simplify()

    if first.kind() == second.kind() and first.kind() != NodeType.FUNCTION:
      first = first.multiply(second)
      second = ConstantTerm(1.0)

    if first.is_zero() or second.is_zero():
      log_debug(f"simplify: zero absorbed product {first.to_string()!r} * {second.to_string()!r}")
      first, second = ConstantTerm(0.0), ConstantTerm(0.0)

    return MultiplicationFunction(first, second)

  def copy(self) -> 'MultiplicationFunction':
    return MultiplicationFunction(self.first.copy(), self.second.copy())

  def children(self) -> List[Node]:
    return [self.first, self.second]

  def is_zero(self) -> bool:
    return self.first.is_zero() or self.second.is_zero()

  def is_one(self) -> bool:
    return self.first.is_one() and self.second.is_one()

  def evaluate(self, X: np.ndarray, bindings: Optional[Dict[str, float]] = None) -> np.ndarray:
    X = as_samples(X)
    return evaluate_product(self.first.evaluate(X, bindings), self.second.evaluate(X, bindings))

  def to_sympy(self) -> sp.Expr:
    return sp.Mul(self.first.to_sympy(), self.second.to_sympy())

  def _structure_key(self) -> tuple:
    return (type(self).__name__, self.first._structure_key(), self.second._structure_key())
