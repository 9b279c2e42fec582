from localshortener.dao.file.file_store import FileKeyValueStore


__all__ = [
    'FileKeyValueStore',
]
