"""
Analytics Package.

Everything that talks to the Tinybird analytics API:
- Pipe catalogue for the logical endpoints
- Async HTTP client with token handling
- Post-processing of returned rows
"""

from .client import AnalyticsClient, BackendResponse
from .pipes import RECENT, Pipe, forwarded_params, resolve_pipe

__all__ = [
    "AnalyticsClient",
    "BackendResponse",
    "Pipe",
    "RECENT",
    "forwarded_params",
    "resolve_pipe",
]
