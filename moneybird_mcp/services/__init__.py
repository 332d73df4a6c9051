"""
Moneybird API access: the HTTP client, its lazy provider and the error taxonomy.
"""

from .errors import ErrorKind, MoneybirdError
from .moneybird import ClientProvider, MoneybirdClient

__all__ = [
    "ClientProvider",
    "ErrorKind",
    "MoneybirdClient",
    "MoneybirdError",
]
