from __future__ import annotations

from pathlib import Path

import pytest

from weatherapp.core.abstractions import NetworkCapabilities, Transport
from weatherapp.core.connectivity import is_network_available
from weatherapp.core.platform import SysfsNetworkStack

from tests.fakes import FakeNetwork


@pytest.mark.parametrize("transport", [Transport.CELLULAR, Transport.WIFI, Transport.ETHERNET])
def test_internet_transports_are_available(transport):
    stack = FakeNetwork(NetworkCapabilities(transports=frozenset({transport})))
    assert is_network_available(stack) is True


def test_no_active_network():
    assert is_network_available(FakeNetwork(None)) is False


def test_other_transport_is_not_available():
    stack = FakeNetwork(NetworkCapabilities(transports=frozenset({Transport.OTHER})))
    assert is_network_available(stack) is False


def test_unvalidated_network_is_not_available():
    stack = FakeNetwork(NetworkCapabilities(transports=frozenset({Transport.WIFI}), validated=False))
    assert is_network_available(stack) is False


def _interface(root: Path, name: str, *, operstate: str, arp_type: int = 1, carrier: str = "1", wireless: bool = False):
    path = root / name
    path.mkdir()
    (path / "operstate").write_text(operstate + "\n")
    (path / "type").write_text(f"{arp_type}\n")
    (path / "carrier").write_text(carrier + "\n")
    if wireless:
        (path / "wireless").mkdir()
    return path


def test_sysfs_skips_loopback_and_down_interfaces(tmp_path):
    _interface(tmp_path, "lo", operstate="unknown", arp_type=772)
    _interface(tmp_path, "eth0", operstate="down")
    _interface(tmp_path, "wlan0", operstate="up", wireless=True)

    capabilities = SysfsNetworkStack(tmp_path).active_network()

    assert capabilities == NetworkCapabilities(transports=frozenset({Transport.WIFI}), validated=True)


def test_sysfs_prefers_internet_transport_over_tunnel(tmp_path):
    _interface(tmp_path, "tailscale0", operstate="up", arp_type=65534)
    _interface(tmp_path, "wlan0", operstate="up", wireless=True)

    stack = SysfsNetworkStack(tmp_path)

    assert stack.active_network().transports == frozenset({Transport.WIFI})
    assert is_network_available(stack) is True


def test_sysfs_prefers_interface_with_carrier(tmp_path):
    _interface(tmp_path, "eth0", operstate="up", carrier="0")
    _interface(tmp_path, "wlan0", operstate="up", wireless=True)

    capabilities = SysfsNetworkStack(tmp_path).active_network()

    assert capabilities == NetworkCapabilities(transports=frozenset({Transport.WIFI}), validated=True)


def test_sysfs_tunnel_only_is_not_available(tmp_path):
    _interface(tmp_path, "tun0", operstate="up", arp_type=65534)

    stack = SysfsNetworkStack(tmp_path)

    assert stack.active_network().transports == frozenset({Transport.OTHER})
    assert is_network_available(stack) is False


def test_sysfs_detects_ethernet_and_cellular(tmp_path):
    _interface(tmp_path, "wwan0", operstate="up", arp_type=519)
    assert SysfsNetworkStack(tmp_path).active_network().transports == frozenset({Transport.CELLULAR})

    other = tmp_path / "other"
    other.mkdir()
    _interface(other, "enp3s0", operstate="up")
    assert SysfsNetworkStack(other).active_network().transports == frozenset({Transport.ETHERNET})


def test_sysfs_without_carrier_is_not_validated(tmp_path):
    _interface(tmp_path, "eth0", operstate="up", carrier="0")

    assert is_network_available(SysfsNetworkStack(tmp_path)) is False


def test_sysfs_without_interfaces(tmp_path):
    assert SysfsNetworkStack(tmp_path / "missing").active_network() is None
    assert SysfsNetworkStack(tmp_path).active_network() is None
