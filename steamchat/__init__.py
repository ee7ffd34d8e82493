"""
steamchat - Async Python client for Steam Friends over the Steam Web API.

Usage:
    >>> from steamchat import SteamClient, LoginStatus
    >>>
    >>> async with SteamClient() as steam:
    ...     await steam.authenticate_with_token(token)
    ...     for update in await steam.poll():
    ...         print(update)
"""
import logging
from .client import SteamClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    AsyncAPIClient,
    AsyncAuthService,
    AuthResult,
    Paginator,
    SequencedRequester,
    PollLoop,
    LookupService,
)

from .core.session import Session
from .core.enums import AvatarSize, LoginStatus, ProfileVisibility, UpdateType, UserStatus
from .core.models import Friend, User, Group, GroupInfo, ServerInfo
from .core.updates import Update, MessageUpdate, EmoteUpdate, TypingNotification, UserUpdate
from .core.exceptions import (
    SteamException,
    TransportError,
    MalformedResponseError,
    FunctionalError,
    NotAuthenticatedError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for steamchat modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'steamchat',
        'steamchat.api',
        'steamchat.auth',
        'steamchat.client',
        'steamchat.events',
        'steamchat.lookups',
        'steamchat.messaging',
        'steamchat.poller',
        'steamchat.response',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'SteamClient',
    'Session',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'AsyncAPIClient',
    'AsyncAuthService',
    'AuthResult',
    'Paginator',
    'SequencedRequester',
    'PollLoop',
    'LookupService',
    'AvatarSize',
    'LoginStatus',
    'ProfileVisibility',
    'UpdateType',
    'UserStatus',
    'Friend',
    'User',
    'Group',
    'GroupInfo',
    'ServerInfo',
    'Update',
    'MessageUpdate',
    'EmoteUpdate',
    'TypingNotification',
    'UserUpdate',
    'SteamException',
    'TransportError',
    'MalformedResponseError',
    'FunctionalError',
    'NotAuthenticatedError',
    'setup_logging',
]
