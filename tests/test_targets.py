import socket

import pytest

from portsweep import targets
from portsweep.models import Target
from portsweep.targets import DEFAULT_HOST, display_name, resolve_target


def test_default_uses_ip_literal(monkeypatch):
    def lookup(host):
        raise AssertionError("default host must not be resolved")

    monkeypatch.setattr(targets, "lookup_host", lookup)
    assert resolve_target("10.0.0.5", DEFAULT_HOST) == Target(address="10.0.0.5")


def test_custom_host_is_resolved(monkeypatch):
    monkeypatch.setattr(targets, "lookup_host", lambda host: "203.0.113.9")
    assert resolve_target("8.8.8.8", "scanme.example").address == "203.0.113.9"


def test_resolution_failure_falls_back_to_ip(monkeypatch, caplog):
    def lookup(host):
        raise socket.gaierror(-2, "Name or service not known")

    monkeypatch.setattr(targets, "lookup_host", lookup)
    assert resolve_target("8.8.4.4", "nowhere.invalid").address == "8.8.4.4"
    assert "Could not resolve nowhere.invalid" in caplog.text


def test_invalid_ip_literal():
    with pytest.raises(ValueError):
        resolve_target("999.1.1.1", DEFAULT_HOST)


def test_loopback_is_localhost(monkeypatch):
    def reverse(addr):
        raise AssertionError("loopback must not be looked up")

    monkeypatch.setattr(targets.socket, "gethostbyaddr", reverse)
    assert display_name(Target(address="127.0.0.1")) == "localhost"
    assert display_name(Target(address="::1")) == "localhost"


def test_reverse_lookup(monkeypatch):
    monkeypatch.setattr(targets.socket, "gethostbyaddr", lambda addr: ("dns.google", [], [addr]))
    assert display_name(Target(address="8.8.8.8")) == "dns.google"


def test_reverse_lookup_failure_falls_back(monkeypatch, caplog):
    def reverse(addr):
        raise socket.herror(1, "Unknown host")

    monkeypatch.setattr(targets.socket, "gethostbyaddr", reverse)
    assert display_name(Target(address="192.0.2.44")) == "192.0.2.44"
    assert "Reverse lookup" in caplog.text
