from dataclasses import dataclass
from functools import total_ordering


@dataclass(frozen=True, order=True)
class VariableIdentifier:
  name: str

  def __str__(self) -> str:
    return self.name


@total_ordering
@dataclass(frozen=True, eq=True)
class VariableEntity:
  """A named variable raised to an integer power.

  Equality is structural (name and exponent); ordering is by name only,
  so sorting a list of entities groups them alphabetically.
  """
  identifier: VariableIdentifier
  exponent: int = 1

  @classmethod
  def of(cls, name: str, exponent: int = 1) -> 'VariableEntity':
    return cls(VariableIdentifier(name), exponent)

  @property
  def name(self) -> str:
    return self.identifier.name

  def same_variable(self, other: 'VariableEntity') -> bool:
    return self.identifier == other.identifier

  def with_exponent(self, exponent: int) -> 'VariableEntity':
    return VariableEntity(self.identifier, exponent)

  def __lt__(self, other: 'VariableEntity') -> bool:
    if not isinstance(other, VariableEntity):
      return NotImplemented
    return self.identifier < other.identifier

  def to_string(self) -> str:
    if self.exponent == 1:
      return self.name
    return f"{self.name}^{self.exponent}"
