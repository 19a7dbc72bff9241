from __future__ import annotations

import enum
import ipaddress
from dataclasses import dataclass
from typing import Optional, Tuple

MAX_PORT = 65535


class PortStatus(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class ScanState(enum.Enum):
    HOST_DOWN = "host-down"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Target:
    address: str
    name: Optional[str] = None

    def __post_init__(self) -> None:
        # Normalise "::0001" -> "::1" etc; raises ValueError on garbage
        object.__setattr__(self, "address", str(ipaddress.ip_address(self.address)))

    @property
    def ip(self):
        return ipaddress.ip_address(self.address)

    @property
    def version(self) -> int:
        return self.ip.version

    @property
    def is_loopback(self) -> bool:
        return self.ip.is_loopback


@dataclass(frozen=True)
class ScanRequest:
    port_limit: int
    timeout: float
    width: int

    def __post_init__(self) -> None:
        if self.port_limit < 1 or self.port_limit > MAX_PORT:
            raise ValueError(f"Invalid port limit: {self.port_limit} (must be 1-{MAX_PORT})")
        if self.timeout <= 0:
            raise ValueError(f"Invalid timeout: {self.timeout}")
        if self.width < 1:
            raise ValueError(f"Invalid admission width: {self.width}")


@dataclass(frozen=True)
class CatalogEntry:
    port: int
    service: str


@dataclass(frozen=True)
class PortOutcome:
    port: int
    status: PortStatus
    service: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.status is PortStatus.OPEN


@dataclass(frozen=True)
class ScanReport:
    target: Target
    port_limit: int
    state: ScanState
    open_ports: Tuple[PortOutcome, ...] = ()
    closed_count: int = 0

    @property
    def open_count(self) -> int:
        return len(self.open_ports)

    @property
    def host_down(self) -> bool:
        return self.state is ScanState.HOST_DOWN
