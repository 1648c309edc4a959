from .db import Database
from .memory import MemoryStore

__all__ = ["Database", "MemoryStore"]
