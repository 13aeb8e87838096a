import numpy as np
import sympy as sp
from typing import Dict, Optional
from .core.node import Node
from .utils.tree_utils import calculate_tree_depth
from ..logging_system import LogLevel, log_info


class Expression:
  """Expression wrapper around a root node with a cached rendering"""

  __slots__ = ('root', '_string_cache')

  def __init__(self, root: Node):
    self.root = root
    self._string_cache: Optional[str] = None

  def to_string(self) -> str:
    # An all-zero summation renders as the empty string; show it as 0
    if self._string_cache is None:
      self._string_cache = self.root.to_string() or "0"
    return self._string_cache

  def differentiate(self) -> 'Expression':
    derivative = Expression(self.root.differentiate().simplify())
    log_info(f"differentiated {self.to_string()} into {derivative.to_string()}", LogLevel.DETAILED)
    return derivative

  def simplify(self) -> 'Expression':
    return Expression(self.root.simplify())

  def copy(self) -> 'Expression':
    return Expression(self.root.copy())

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def evaluate(self, X: np.ndarray, bindings: Optional[Dict[str, float]] = None) -> np.ndarray:
    return self.root.evaluate(X, bindings)

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  def clear_cache(self):
    """Clear cached values"""
    self._string_cache = None

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r})"

  def __hash__(self) -> int:
    return hash(self.root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.root == other.root
