from localshortener.store.entry_store import EntryStore


__all__ = [
    'EntryStore',
]
