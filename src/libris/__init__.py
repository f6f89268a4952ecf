"""
Libris Backend
GraphQL catalog of authors and books with token-based identity
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
