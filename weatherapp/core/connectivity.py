"""Network reachability probe."""
from __future__ import annotations

from .abstractions import NetworkStack, Transport

INTERNET_TRANSPORTS = frozenset({Transport.CELLULAR, Transport.WIFI, Transport.ETHERNET})


def is_network_available(stack: NetworkStack) -> bool:
    """True iff the active network is validated and uses cellular, wifi or ethernet."""
    capabilities = stack.active_network()
    if capabilities is None:
        return False
    if not capabilities.validated:
        return False
    return bool(capabilities.transports & INTERNET_TRANSPORTS)


__all__ = ["is_network_available", "INTERNET_TRANSPORTS"]
