import sympy as sp
from typing import Optional

from ..core.node import Node
from .tree_utils import get_active_variables
from ...exceptions import MultipleVariablesError
from ...logging_system import LogLevel, log_debug, log_info


class SymPyVerifier:
  """Cross-checks derivatives produced by the engine against SymPy"""

  @staticmethod
  def _root(expr) -> Node:
    # Accepts a bare node or an Expression wrapper
    return getattr(expr, "root", expr)

  def differentiation_symbol(self, original, variable: Optional[str] = None) -> sp.Symbol:
    """Symbol to differentiate with respect to; inferred from the tree if not given"""
    if variable is not None:
      return sp.Symbol(variable)

    names = get_active_variables(self._root(original))
    if len(names) > 1:
      raise MultipleVariablesError(
        f"verify: expression uses several active variables: {', '.join(sorted(names))}"
      )
    # A tree without variable terms is constant in any symbol
    return sp.Symbol(names.pop() if names else 'x')

  def verify_derivative(self, original, derivative, variable: Optional[str] = None) -> bool:
    """
    True iff `derivative` is the symbolic derivative of `original`.
    """
    symbol = self.differentiation_symbol(original, variable)
    expected = sp.diff(self._root(original).to_sympy(), symbol)
    actual = self._root(derivative).to_sympy()
    difference = sp.simplify(expected - actual)
    log_debug(f"verify: expected {expected}, got {actual}, difference {difference}")
    agrees = difference == 0
    log_info(f"verify: SymPy d/d{symbol} {'agrees' if agrees else 'disagrees'}", LogLevel.DETAILED)
    return agrees

  def latex_representation(self, expr) -> str:
    """Get LaTeX representation of the expression"""
    return sp.latex(self._root(expr).to_sympy())
