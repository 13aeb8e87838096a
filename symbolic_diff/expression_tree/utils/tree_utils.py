"""
Tree Utility Functions

Traversal and inspection helpers for expression trees. The children of a
VariableTerm are its coefficients; constants are leaves.
"""

from collections import deque
from typing import List, Set

from ..core.node import Node, ConstantTerm, VariableTerm
from ..core.operators import NodeType


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    nodes_to_visit = deque([node])
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.popleft()
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Depth-first pre-order traversal (recursive)"""
    nodes = [node]
    for child in node.children():
        nodes.extend(_depth_first_traversal(child))
    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    children = node.children()
    if not children:
        return 1
    return 1 + max(calculate_tree_depth(child) for child in children)


def find_nodes_by_type(node: Node, node_type: NodeType) -> List[Node]:
    """Find all nodes whose kind() is node_type"""
    return [n for n in get_all_nodes(node) if n.kind() == node_type]


def get_active_variables(node: Node) -> Set[str]:
    """Names of the differentiation variables used by VariableTerm nodes"""
    return {n.variable.name for n in get_all_nodes(node) if isinstance(n, VariableTerm)}


def get_incidental_variables(node: Node) -> Set[str]:
    """Names of the incidental variables carried by ConstantTerm nodes"""
    names = set()
    for n in get_all_nodes(node):
        if isinstance(n, ConstantTerm):
            names.update(var.name for var in n.non_wrt_variables)
    return names


def clone_tree(node: Node) -> Node:
    return node.copy()
