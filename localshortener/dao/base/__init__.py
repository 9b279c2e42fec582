from localshortener.dao.base.key_value_base_store import KeyValueBaseStore


__all__ = [
    'KeyValueBaseStore',
]
