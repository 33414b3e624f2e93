from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from utils.app_config import RouterConfig


_TENANT_SLUG_RE = re.compile(r"^[a-z0-9-]+$")
_HOST_LABEL_RE = re.compile(r"^[a-z0-9_-]+$")

LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "0.0.0.0", "::1"})
LOCAL_SUFFIXES = (".localhost",)


class HostKind(str, Enum):
    ROOT_DOMAIN = "root_domain"
    TENANT_SUBDOMAIN = "tenant_subdomain"
    ADMIN_HOST = "admin_host"


@dataclass(frozen=True)
class ParsedHost:
    labels: tuple[str, ...]
    port: Optional[int] = None

    @property
    def hostname(self) -> str:
        return ".".join(self.labels)


@dataclass(frozen=True)
class HostClassification:
    kind: HostKind
    host: str
    slug: Optional[str] = None

    @property
    def is_tenant(self) -> bool:
        return self.kind is HostKind.TENANT_SUBDOMAIN


def _port(raw_port: str) -> Optional[int]:
    # nur ASCII-Ziffern, "²" besteht isdigit() auch
    if raw_port.isascii() and raw_port.isdigit():
        return int(raw_port)
    return None


def _split_port(host: str) -> Optional[tuple[str, Optional[int]]]:
    """None, wenn der Port-Teil kaputt ist."""
    if host.startswith("["):
        # [v6-literal]:port
        end = host.find("]")
        if end == -1:
            return None
        rest = host[end + 1:]
        if not rest:
            return host[1:end], None
        if not rest.startswith(":"):
            return None
        port = _port(rest[1:])
        return (host[1:end], port) if port is not None else None

    if host.count(":") == 1:
        name, _, raw_port = host.partition(":")
        port = _port(raw_port)
        return (name, port) if port is not None else None
    return host, None


def parse_host(raw_host: str | None) -> ParsedHost:
    """Lowercase a Host header value and split it into labels and port."""
    host = str(raw_host or "").strip().lower()
    if "," in host:
        host = host.split(",", 1)[0].strip()
    if not host:
        return ParsedHost(labels=())

    split = _split_port(host)
    if split is None:
        return ParsedHost(labels=())
    name, port = split
    name = name.rstrip(".")
    if not name:
        return ParsedHost(labels=(), port=port)
    if ":" in name:
        # bare IPv6 literal, keep it as one label
        return ParsedHost(labels=(name,), port=port)
    return ParsedHost(labels=tuple(name.split(".")), port=port)


def _is_ip_literal(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return True


def _is_local_or_preview(hostname: str, config: RouterConfig) -> bool:
    if hostname in LOOPBACK_HOSTS:
        return True
    if any(hostname.endswith(suffix) for suffix in LOCAL_SUFFIXES):
        return True
    return any(
        hostname.endswith(suffix) or hostname == suffix.lstrip(".")
        for suffix in config.preview_suffixes
    )


def _root_domain(hostname: str) -> HostClassification:
    return HostClassification(kind=HostKind.ROOT_DOMAIN, host=hostname)


def _matching_root(hostname: str, config: RouterConfig) -> Optional[str]:
    for root in config.root_domains:
        if hostname.endswith(f".{root}"):
            return root
    return None


def classify_host(raw_host: str | None, config: RouterConfig) -> HostClassification:
    """
    Map a Host header to ROOT_DOMAIN, TENANT_SUBDOMAIN(slug) or ADMIN_HOST.

    Total: malformed or unexpected hosts classify as ROOT_DOMAIN so they are
    never rewritten to a tenant site.
    """
    parsed = parse_host(raw_host)
    hostname = parsed.hostname

    if not parsed.labels or any(not label for label in parsed.labels):
        return _root_domain(hostname)

    for domain in config.root_domains:
        if hostname == domain or hostname == f"www.{domain}":
            return _root_domain(hostname)

    if len(parsed.labels) >= 2 and parsed.labels[0] == "admin":
        return HostClassification(kind=HostKind.ADMIN_HOST, host=hostname)

    if _is_local_or_preview(hostname, config) or _is_ip_literal(hostname):
        return _root_domain(hostname)

    if not all(_HOST_LABEL_RE.match(label) for label in parsed.labels):
        return _root_domain(hostname)

    root = _matching_root(hostname, config)
    if root is None:
        # fremde Domain, nie als Tenant behandeln
        return _root_domain(hostname)

    root_label_count = len(root.split("."))
    first = parsed.labels[0]
    if len(parsed.labels) > root_label_count and _TENANT_SLUG_RE.match(first):
        return HostClassification(
            kind=HostKind.TENANT_SUBDOMAIN,
            host=hostname,
            slug=first,
        )

    return _root_domain(hostname)
