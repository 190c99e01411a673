from .memory import InMemoryStore, RecordMap

__all__ = ["InMemoryStore", "RecordMap"]
