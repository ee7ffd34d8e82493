"""
API configuration module.

Provides configuration for the Steam Web API client. Open for extension
through custom configurations.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import ssl


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password:
            # Insert credentials into URL
            if '://' in self.url:
                protocol, rest = self.url.split('://', 1)
                return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class SSLConfig:
    """SSL/TLS configuration."""
    verify: bool = True
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self):
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    The only timeouts applied to a call; the client itself never retries.
    """
    total: float = 60.0
    connect: float = 15.0
    sock_read: float = 45.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes endpoint, header and OAuth constants used by the client.
    """
    # Endpoints
    gateway: str = 'https://api.steampowered.com/'
    community_url: str = 'http://steamcommunity.com/groups/'

    # Headers sent with every request
    user_agent: str = 'Steam 1291812 / iPhone'
    accept: str = '*/*'
    accept_encoding: str = 'gzip, deflate'
    accept_language: str = 'en-us'
    extra_headers: Dict[str, str] = field(default_factory=dict)

    # OAuth credential exchange
    client_id: str = 'DE45CD61'
    oauth_scope: str = 'read_profile write_profile read_client write_client'

    # Server limit on identifiers per lookup request
    page_size: int = 100

    # Sub-configurations
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    # Connection pool settings
    limit_per_host: int = 4
    limit: int = 10

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    def get_headers(self) -> Dict[str, str]:
        return {
            'Accept': self.accept,
            'Accept-Encoding': self.accept_encoding,
            'Accept-Language': self.accept_language,
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        return {
            'headers': self.get_headers(),
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
