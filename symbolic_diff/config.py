"""
Engine configuration.

A single global EngineConfig governs numeric tolerances and logging for a
run. Like the logger, it is a module-level singleton and is not thread safe.
"""

from dataclasses import dataclass, fields, replace
from typing import Optional

from .logging_system import LogLevel, configure_logging


@dataclass
class EngineConfig:
  """Options governing simplification, rendering and logging."""
  # Exact comparison by default; a positive value treats near values as 0 or 1
  zero_tolerance: float = 0.0
  log_level: LogLevel = LogLevel.MINIMAL
  log_to_file: bool = False
  log_file_path: Optional[str] = None
  # Upper bound on merges in one summation simplify; None means unbounded
  max_merge_passes: Optional[int] = None

  def is_close(self, value: float, target: float) -> bool:
    return abs(value - target) <= self.zero_tolerance


_global_config: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
  """Get or create the global configuration"""
  global _global_config
  if _global_config is None:
    _global_config = EngineConfig()
  return _global_config


def set_config(config: EngineConfig) -> EngineConfig:
  """Replace the global configuration and reconfigure logging to match"""
  global _global_config
  _global_config = config
  configure_logging(config.log_level, config.log_to_file, config.log_file_path)
  return _global_config


def configure(**overrides) -> EngineConfig:
  """Update selected fields of the global configuration"""
  known = {f.name for f in fields(EngineConfig)}
  unknown = set(overrides) - known
  if unknown:
    raise ValueError(f"Unknown configuration options: {', '.join(sorted(unknown))}")
  return set_config(replace(get_config(), **overrides))
