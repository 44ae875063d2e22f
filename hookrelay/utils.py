"""Network helpers for startup diagnostics."""

import ipaddress
import socket


def _usable(address: str) -> bool:
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False
    return ip.version == 4 and not ip.is_loopback and not ip.is_unspecified


def external_ip() -> str:
    """Return a non-loopback IPv4 address of this machine.

    Raises ``OSError`` when none can be found.
    """
    # Connecting a UDP socket sends nothing; it only selects the outgoing interface
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("10.255.255.255", 1))
            address = sock.getsockname()[0]
        if _usable(address):
            return address
    except OSError:
        pass

    for info in socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET):
        address = info[4][0]
        if _usable(address):
            return address

    raise OSError("connected to the network?")
