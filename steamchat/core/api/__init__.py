"""Steam Web API module: transport, authentication, messaging, polling and lookups."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .protocols import Transport
from .async_client import AsyncAPIClient
from .async_auth import AsyncAuthService, AuthResult
from .paginator import Paginator
from .messaging import SequencedRequester
from .poller import PollLoop
from .lookups import LookupService
from .events import EventEmitter

__all__ = [
    # Transport
    'Transport',
    'AsyncAPIClient',

    # Services
    'AsyncAuthService',
    'AuthResult',
    'Paginator',
    'SequencedRequester',
    'PollLoop',
    'LookupService',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',

    # Events
    'EventEmitter',
]
