from localshortener.models import UrlEntryModel, CreateUrlResult, UrlStats, ValidationFailure, ValidationResult
from localshortener.service import UrlShortenerService
from localshortener.sweeper import ExpirySweeper
from localshortener.factory import create_service


__all__ = [
    'UrlEntryModel',
    'CreateUrlResult',
    'UrlStats',
    'ValidationFailure',
    'ValidationResult',
    'UrlShortenerService',
    'ExpirySweeper',
    'create_service',
]
