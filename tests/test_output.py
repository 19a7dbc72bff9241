import pytest

from portsweep.models import PortOutcome, PortStatus, ScanReport, ScanState, Target
from portsweep.output import aggregate, format_report, print_report

TARGET = Target(address="192.0.2.10", name="test-host")


def outcomes(limit, open_ports):
    for port in range(limit, 0, -1):
        if port in open_ports:
            yield PortOutcome(port=port, status=PortStatus.OPEN, service=open_ports[port])
        else:
            yield PortOutcome(port=port, status=PortStatus.CLOSED)


def test_aggregate_counts():
    report = aggregate(TARGET, outcomes(10, {2: "a", 9: "b"}), 10)
    assert report.state is ScanState.COMPLETED
    assert report.open_count == 2
    assert report.closed_count == 8
    assert [o.port for o in report.open_ports] == [2, 9]


def test_aggregate_rejects_duplicates():
    dup = [PortOutcome(1, PortStatus.CLOSED), PortOutcome(1, PortStatus.OPEN, "x")]
    with pytest.raises(ValueError):
        aggregate(TARGET, dup, 2)


def test_aggregate_rejects_missing_ports():
    with pytest.raises(ValueError):
        aggregate(TARGET, outcomes(5, {}), 6)


def test_format_report_completed():
    report = aggregate(TARGET, outcomes(10, {2: "ssh", 9: "http"}), 10)
    assert format_report(report) == [
        "IP Address 192.0.2.10, Hostname test-host",
        "Port 2: open | Service: ssh",
        "Port 9: open | Service: http",
        "There are 2 ports open and 8 ports closed.",
    ]


def test_format_report_host_down(capsys):
    report = ScanReport(target=TARGET, port_limit=1024, state=ScanState.HOST_DOWN)
    print_report(report)
    assert capsys.readouterr().out.splitlines() == [
        "IP Address 192.0.2.10, Hostname test-host",
        "Host may be Down!",
    ]
