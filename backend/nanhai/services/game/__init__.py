"""Game-state engine: fragment pool, player registry, the dive, persistence
and broadcast.

HTTP routes and socket handlers reach it through ``get_engine()`` and never
touch the document directly.
"""
from .engine import GameEngine, get_engine

__all__ = ['GameEngine', 'get_engine']
