"""
Host string parser

Handles parsing of host strings in various formats:
- hostname
- user@hostname
- user@hostname:port
- user@[ipv6]:port
"""
from typing import Optional, Tuple


def parse_host_string(host: str, user: Optional[str] = None, port: Optional[int] = None) -> Tuple[str, Optional[str], Optional[int]]:
    """
    Parse host string into components.
    
    Explicit ``user`` / ``port`` arguments win over values embedded in the
    string.
        
    Returns:
        Tuple of (hostname, user, port)
        
    Examples:
        parse_host_string("server") -> ("server", None, None)
        parse_host_string("user@server") -> ("server", "user", None)
        parse_host_string("user@server:2222") -> ("server", "user", 2222)
        parse_host_string("user@server:2222", port=3333) -> ("server", "user", 3333)
        parse_host_string("[::1]:2222") -> ("::1", None, 2222)
    """
    parsed_user = user
    parsed_port = port
    host_part = host
    
    if "@" in host:
        embedded_user, host_part = host.rsplit("@", 1)
        parsed_user = user or embedded_user or None
    
    if host_part.startswith("["):
        # Bracketed IPv6 literal, optionally followed by :port
        end = host_part.find("]")
        if end == -1:
            raise ValueError(f"Unterminated IPv6 address in {host!r}")
        rest = host_part[end + 1:]
        host_part, port_str = host_part[1:end], rest[1:] if rest.startswith(":") else ""
    elif host_part.count(":") == 1:
        host_part, port_str = host_part.split(":", 1)
    else:
        # Bare IPv6 literal or no port
        port_str = ""
    
    if port_str and parsed_port is None:
        try:
            parsed_port = int(port_str)
        except ValueError:
            raise ValueError(f"Invalid port {port_str!r} in {host!r}") from None
    
    if not host_part:
        raise ValueError(f"No host name in {host!r}")
    
    return host_part, parsed_user, parsed_port
