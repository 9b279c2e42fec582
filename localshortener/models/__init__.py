from localshortener.models.url_entry_model import UrlEntryModel
from localshortener.models.results import ValidationFailure, ValidationResult, CreateUrlResult, UrlStats


__all__ = [
    'UrlEntryModel',
    'ValidationFailure',
    'ValidationResult',
    'CreateUrlResult',
    'UrlStats',
]
