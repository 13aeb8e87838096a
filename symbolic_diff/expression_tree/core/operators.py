import numpy as np
import numba
from enum import IntEnum

class NodeType(IntEnum):
  CONSTANT = 0
  VARIABLE = 1
  FUNCTION = 2

class FunctionType(IntEnum):
  SUMMATION = 0
  MULTIPLICATION = 1

# Separators used when rendering
FUNCTION_SEPARATORS = {FunctionType.SUMMATION: ' + ', FunctionType.MULTIPLICATION: '*'}

@numba.njit(cache=True, inline='always')
def evaluate_constant(n_samples, value):
  return np.full(n_samples, value, dtype=np.float64)

@numba.njit(cache=True)
def evaluate_power(base_val, exponent):
  if exponent == 0:
    return np.ones_like(base_val)
  return np.power(base_val, np.float64(exponent))

@numba.njit(cache=True, fastmath=True)
def evaluate_sum(left_val, right_val):
  return left_val + right_val

@numba.njit(cache=True, fastmath=True)
def evaluate_product(left_val, right_val):
  return left_val * right_val
