from collections.abc import Callable
from typing import Any, TypeAlias


# Type aliases for serialized records
EntryRecord: TypeAlias = dict[str, Any]
CodeIndex: TypeAlias = dict[str, str]

# Callables injected into validators and generators
CodeLookup: TypeAlias = Callable[[str], bool]
