"""
Core Interfaces Module

Protocols for the cache tiers, enabling dependency injection and loose coupling.

Usage:
------
```python
from hotel_search.core.interfaces import DistributedCache

def build(tier: DistributedCache):
    await tier.get("booking:search:london")
```
"""

from hotel_search.core.interfaces.cache import (
    DistributedCache,
    ErrorReporter,
    InMemoryDistributedCache,
)

__all__ = [
    "DistributedCache",
    "ErrorReporter",
    "InMemoryDistributedCache",
]
