"""Utilities for expression trees."""

from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_type,
    get_active_variables, get_incidental_variables, clone_tree
)
from .sympy_utils import SymPyVerifier

__all__ = [
    'SymPyVerifier',
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_type',
    'get_active_variables', 'get_incidental_variables', 'clone_tree'
]
