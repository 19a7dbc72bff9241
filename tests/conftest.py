import threading
import time

import pytest

from portsweep.models import PortStatus, Target


@pytest.fixture
def target():
    return Target(address="192.0.2.10", name="test-host")


class FakeProber:
    """Stands in for probe_port: fixed set of open ports, tracks concurrency."""

    def __init__(self, open_ports=(), delay=0.0):
        self.open_ports = set(open_ports)
        self.delay = delay
        self.lock = threading.Lock()
        self.current = 0
        self.peak = 0
        self.ports = []

    def __call__(self, target, port, timeout, policy):
        with self.lock:
            self.current += 1
            self.peak = max(self.peak, self.current)
            self.ports.append(port)
        try:
            if self.delay:
                time.sleep(self.delay)
            return PortStatus.OPEN if port in self.open_ports else PortStatus.CLOSED
        finally:
            with self.lock:
                self.current -= 1


@pytest.fixture
def fake_prober():
    return FakeProber
