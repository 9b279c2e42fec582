from localshortener.dao.memory.memory_store import MemoryKeyValueStore


__all__ = [
    'MemoryKeyValueStore',
]
