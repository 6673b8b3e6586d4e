"""
Async Jira REST client used to look up issue metadata.

Wraps a single ``httpx.AsyncClient`` authenticated with basic auth
(username and password or API token) for the lifetime of one report run.
"""

import logging
from typing import Dict, Any, Optional

import httpx

from config.settings import JiraSettings, settings

logger = logging.getLogger(__name__)


class JiraClient:
    """Minimal async client for the Jira issue endpoint."""

    def __init__(
        self,
        protocol: str,
        host: str,
        username: str,
        password: str,
        jira_settings: Optional[JiraSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        jira_settings = jira_settings or settings.jira
        self.protocol = protocol
        self.host = host.rstrip("/")
        self.api_version = jira_settings.api_version
        self.base_url = f"{self.protocol}://{self.host}/rest/api/{self.api_version}"

        client_options: Dict[str, Any] = {
            "auth": (username, password),
            "verify": jira_settings.strict_ssl,
            "headers": {"Accept": "application/json"},
        }
        if jira_settings.timeout is not None:
            client_options["timeout"] = jira_settings.timeout
        if transport is not None:
            client_options["transport"] = transport
        self.client = httpx.AsyncClient(**client_options)

    @classmethod
    def from_url(cls, url: str, username: str, password: str, **kwargs) -> "JiraClient":
        """Create a client from a ``<protocol>://<host>`` URL."""
        protocol, separator, host = url.partition("://")
        if not separator or not protocol or not host:
            raise ValueError(f"Jira URL must look like <protocol>://<host>: {url}")
        return cls(protocol, host, username, password, **kwargs)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the underlying HTTP connection pool."""
        await self.client.aclose()

    async def find_issue(self, code: str) -> Dict[str, Any]:
        """Fetch the raw issue payload for ``code``."""
        url = f"{self.base_url}/issue/{code}"
        logger.debug(f"Requesting {url}")
        response = await self.client.get(url)
        response.raise_for_status()
        return response.json()
