"""
URL helper utilities for social reference validation.

This module provides functions for URI normalization and recognised
social-link checks. Nothing here touches the network: liveness is decided by
the caller and passed in as a set of broken URIs.
"""

from typing import Iterable, Optional
from urllib.parse import urlparse

from drep_scoring.constants import RECOGNIZED_SOCIAL_DOMAINS


def normalize_uri(uri: str) -> str:
    """
    Normalize a URI for deduplication.

    Lower-cases the scheme and host, drops a leading "www." from the host and
    strips a trailing slash from the path. Strings that do not parse as URLs
    are returned stripped but otherwise untouched.

    Examples:
        >>> normalize_uri("HTTPS://X.com/alice/")
        'https://x.com/alice'
        >>> normalize_uri("https://www.twitter.com/alice")
        'https://twitter.com/alice'
        >>> normalize_uri("  not a url ")
        'not a url'
    """
    uri = uri.strip()
    try:
        parsed = urlparse(uri)
    except ValueError:
        return uri
    if not parsed.scheme or not parsed.netloc:
        return uri

    netloc = parsed.netloc.lower()
    if netloc.startswith("www."):
        netloc = netloc[4:]
    path = parsed.path.rstrip("/")
    normalized = f"{parsed.scheme.lower()}://{netloc}{path}"
    if parsed.query:
        normalized += f"?{parsed.query}"
    if parsed.fragment:
        normalized += f"#{parsed.fragment}"
    return normalized


def get_host(uri: str) -> Optional[str]:
    """
    Get the lower-cased host of an http(s) URI without a leading "www.".

    Returns None for anything that is not an http(s) URL with a host.

    Examples:
        >>> get_host("https://www.GitHub.com/alice")
        'github.com'
        >>> get_host("ftp://github.com/alice") is None
        True
    """
    try:
        parsed = urlparse(uri.strip())
    except ValueError:
        return None
    if parsed.scheme.lower() not in ("http", "https"):
        return None
    host = (parsed.hostname or "").lower()
    if not host:
        return None
    if host.startswith("www."):
        host = host[4:]
    return host


def is_social_uri(uri: str) -> bool:
    """True if the URI points at a recognised social platform."""
    host = get_host(uri)
    return host is not None and host in RECOGNIZED_SOCIAL_DOMAINS


def is_validated_social_link(uri: str, broken_uris: Optional[Iterable[str]] = None) -> bool:
    """
    True if the URI is a recognised social link not reported broken.

    Broken URIs are compared after normalization on both sides.
    """
    if not is_social_uri(uri):
        return False
    if not broken_uris:
        return True
    broken = {normalize_uri(b) for b in broken_uris}
    return normalize_uri(uri) not in broken
