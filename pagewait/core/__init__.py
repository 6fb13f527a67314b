"""
Core package for pagewait.
Lightweight package init to avoid import cycles.

Consumers should import submodules directly, e.g.:
  from pagewait.core.engine import WaitUntil
  from pagewait.core.search import SearchInformation, find_single
  from pagewait.core import conditions
"""

__all__: list[str] = []
