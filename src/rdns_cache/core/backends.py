"""
Hostname Resolver Backends

Blocking reverse lookups for a single address. Every backend normalizes its
library's errors to a None result, so callers only ever see "resolved" or
"could not resolve".
"""

import logging
import socket
from typing import List, Optional, Protocol

import dns.exception
import dns.resolver
import dns.reversename

from ..address import Address

logger = logging.getLogger(__name__)


class HostnameResolver(Protocol):
    """Reverse lookup collaborator"""

    def resolve_hostname(self, address: Address) -> Optional[str]:
        ...


class SocketHostnameResolver:
    """Reverse lookup through the system resolver (getnameinfo)"""

    def resolve_hostname(self, address: Address) -> Optional[str]:
        try:
            sockaddr = address.to_sockaddr()
        except ValueError:
            logger.debug(f"No socket address form for {address}")
            return None

        try:
            host, _service = socket.getnameinfo(sockaddr, socket.NI_NAMEREQD)
        except (socket.herror, socket.gaierror, OSError) as e:
            logger.debug(f"getnameinfo failed for {address}: {e}")
            return None

        return host or None


class DnsPythonResolver:
    """Reverse lookup by querying PTR records with dnspython"""

    def __init__(self, nameservers: Optional[List[str]] = None, timeout: float = 2.0):
        """
        Initialize the PTR resolver

        Args:
            nameservers: Explicit nameservers; system configuration when empty
            timeout: Total lifetime of one lookup in seconds
        """
        self.timeout = timeout
        if nameservers:
            self._resolver = dns.resolver.Resolver(configure=False)
            self._resolver.nameservers = list(nameservers)
        else:
            self._resolver = dns.resolver.Resolver()

    def resolve_hostname(self, address: Address) -> Optional[str]:
        try:
            rev_name = dns.reversename.from_address(address.ntoa())
            answers = self._resolver.resolve(
                rev_name, "PTR", lifetime=self.timeout, raise_on_no_answer=False
            )
        except dns.exception.DNSException as e:
            logger.debug(f"PTR lookup failed for {address}: {e}")
            return None

        if not answers:
            return None
        return str(answers[0].target).rstrip(".") or None


def create_hostname_resolver(
    backend: str = "socket",
    nameservers: Optional[List[str]] = None,
    timeout: float = 2.0,
) -> HostnameResolver:
    """Create a resolver backend by name"""
    if backend == "socket":
        return SocketHostnameResolver()
    if backend == "dnspython":
        return DnsPythonResolver(nameservers=nameservers, timeout=timeout)
    raise ValueError(f"Unknown resolver backend: {backend}")
