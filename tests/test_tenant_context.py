from __future__ import annotations

import pytest

from utils.app_config import RouterConfig
from utils.tenant import HostKind, classify_host, parse_host

CONFIG = RouterConfig(root_domains=("example.com",))


def test_root_domain_and_www_are_root():
    assert classify_host("example.com", CONFIG).kind is HostKind.ROOT_DOMAIN
    assert classify_host("www.example.com", CONFIG).kind is HostKind.ROOT_DOMAIN


def test_customer_subdomain_maps_to_tenant():
    result = classify_host("acme.example.com", CONFIG)
    assert result.kind is HostKind.TENANT_SUBDOMAIN
    assert result.slug == "acme"
    assert result.is_tenant


@pytest.mark.parametrize(
    "host",
    ["Example.com:3000", "EXAMPLE.COM", "example.com.", "example.com:443"],
)
def test_case_and_port_do_not_matter(host):
    assert classify_host(host, CONFIG) == classify_host("example.com", CONFIG)


def test_tenant_with_port_and_uppercase():
    result = classify_host("ACME.Example.com:8080", CONFIG)
    assert result.slug == "acme"


@pytest.mark.parametrize("host", ["admin.example.com", "admin.localhost", "admin.anything.org"])
def test_admin_host_never_becomes_tenant(host):
    result = classify_host(host, CONFIG)
    assert result.kind is HostKind.ADMIN_HOST
    assert result.slug is None


@pytest.mark.parametrize(
    "host",
    [
        "localhost:3000",
        "127.0.0.1:8000",
        "0.0.0.0",
        "[::1]:3000",
        "shop.localhost",
        "my-app-git-main.vercel.app",
    ],
)
def test_local_and_preview_hosts_are_root(host):
    assert classify_host(host, CONFIG).kind is HostKind.ROOT_DOMAIN


@pytest.mark.parametrize(
    "host",
    [
        "",
        None,
        "   ",
        "10.0.0.5",
        "com",
        "bad_label.example.com",
        "a..example.com",
        "example.com:\xb2",
        "acme.example.com:\xb9",
        "[::1]:\xb3",
        "acme.example.com:abc",
        "acme.example.com:",
        "[::1",
        "[::1]x",
        "www.other.org",
        "x.y.z",
    ],
)
def test_malformed_or_unexpected_hosts_fall_back_to_root(host):
    result = classify_host(host, CONFIG)
    assert result.kind is HostKind.ROOT_DOMAIN
    assert result.slug is None


def test_first_value_of_comma_joined_header_is_used():
    assert classify_host("acme.example.com, proxy.internal", CONFIG).slug == "acme"


def test_longer_root_domains_count_their_own_labels():
    config = RouterConfig(root_domains=("example.com", "sites.example.org"))
    assert classify_host("sites.example.org", config).kind is HostKind.ROOT_DOMAIN
    assert classify_host("shop.sites.example.org", config).slug == "shop"
    assert classify_host("example.org", config).kind is HostKind.ROOT_DOMAIN


def test_custom_preview_suffix():
    config = RouterConfig(preview_suffixes=(".preview.test",))
    assert classify_host("pr-12.preview.test", config).kind is HostKind.ROOT_DOMAIN
    assert classify_host("acme.example.com", config).slug == "acme"


def test_parse_host_splits_labels_and_port():
    parsed = parse_host("Acme.Example.COM:3000")
    assert parsed.labels == ("acme", "example", "com")
    assert parsed.port == 3000
    assert parsed.hostname == "acme.example.com"


def test_parse_host_ipv6_literal():
    assert parse_host("[::1]:8080").labels == ("::1",)
    assert parse_host("[::1]:8080").port == 8080
    assert parse_host("::1").labels == ("::1",)


def test_parse_host_empty():
    assert parse_host(None).labels == ()
    assert parse_host("").port is None


@pytest.mark.parametrize("host", ["example.com:\xb2", "[::1]:\xb3", "acme.example.com:12a"])
def test_parse_host_drops_hosts_with_broken_ports(host):
    assert parse_host(host).labels == ()
    assert parse_host(host).port is None
