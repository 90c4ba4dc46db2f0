from decimal import Decimal

from ledgerlog.processor import process_sources

SCENARIO = [
    "[2025-05-10 09:00:00] userA balance inquiry 1000.00",
    "[2025-05-10 09:10:00] userA transferred 200.00 to userB",
    "[2025-05-10 09:30:00] userA withdrew 100.00",
]

MIXED = [
    "[2025-05-10 09:20:00] userB transferred 50.00 to userA",
    "[2025-05-10 09:00:00] userA balance inquiry 1000.00",
    "[2025-05-10 09:40:00] userB balance inquiry 150.00",
    "[2025-05-10 09:30:00] userA withdrew 100.00",
    "[2025-05-10 09:10:00] userA transferred 200.00 to userB",
]


def test_inquiry_transfer_withdrawal_scenario(clock):
    ledgers = process_sources([SCENARIO], clock=clock)

    assert ledgers["userA"].lines[-1].endswith("userA final balance 700.00")
    assert "[2025-05-10 09:10:00] userB received 200.00 from userA" in ledgers["userB"].lines
    assert ledgers["userB"].lines[-1].endswith("userB final balance 200.00")


def test_transfer_without_inquiry(clock):
    ledgers = process_sources([["[2025-01-01 01:00:00] userA transferred 300.00 to userB"]], clock=clock)

    assert ledgers["userA"].lines[-1].endswith("userA final balance -300.00")
    assert ledgers["userB"].lines[-1].endswith("userB final balance 300.00")


def test_ledger_lines_are_chronological(clock):
    ledgers = process_sources([MIXED], clock=clock)

    assert ledgers["userA"].lines[:-1] == (
        "[2025-05-10 09:00:00] userA balance inquiry 1000.00",
        "[2025-05-10 09:10:00] userA transferred 200.00 to userB",
        "[2025-05-10 09:20:00] userA received 50.00 from userB",
        "[2025-05-10 09:30:00] userA withdrew 100.00",
    )
    assert ledgers["userA"].balance == Decimal("750.00")
    assert ledgers["userB"].balance == Decimal("150.00")


def test_partitioning_sources_does_not_change_output(clock):
    single = process_sources([MIXED], clock=clock)
    split = process_sources([MIXED[3:], MIXED[:1], MIXED[1:3]], clock=clock)
    one_per_line = process_sources([[line] for line in reversed(MIXED)], clock=clock)

    assert single == split == one_per_line


def test_concurrent_parse_gives_same_ledgers(clock):
    sources = [MIXED[:2], MIXED[2:4], MIXED[4:]]

    assert process_sources(sources, clock=clock, parse_workers=3) == process_sources(sources, clock=clock)


def test_noise_only_input_produces_nothing(clock):
    assert process_sources([["", "hello"], []], clock=clock) == {}


def test_sample_logs(clock):
    log1 = [
        "[2025-05-10 09:00:22] user001 balance inquiry 1000.00",
        "[2025-05-10 09:05:44] user001 transferred 100.00 to user002",
        "[2025-05-10 09:06:00] user001 transferred 120.00 to user002",
        "[2025-05-10 10:30:55] user005 transferred 10.00 to user003",
        "[2025-05-10 11:09:01] user001 transferred 235.54 to user004",
        "[2025-05-10 12:38:31] user003 transferred 150.00 to user002",
        "[2025-05-11 10:00:31] user002 balance inquiry 210.00",
    ]
    log2 = [
        "[2025-05-10 10:03:23] user002 transferred 990.00 to user001",
        "[2025-05-10 10:15:56] user002 balance inquiry 110.00",
        "[2025-05-10 10:25:43] user003 transferred 120.00 to user002",
        "[2025-05-10 11:00:03] user001 balance inquiry 1770",
        "[2025-05-10 11:01:12] user001 transferred 102.00 to user003",
        "[2025-05-10 17:04:09] user001 transferred 235.54 to user004",
        "[2025-05-10 23:45:32] user003 transferred 150.00 to user002",
        "[2025-05-10 23:55:32] user002 withdrew 50",
    ]

    ledgers = process_sources([log1, log2], clock=clock)

    assert sorted(ledgers) == ["user001", "user002", "user003", "user004", "user005"]
    assert ledgers["user001"].balance == Decimal("1196.92")
    assert ledgers["user002"].balance == Decimal("-400.00")
    assert ledgers["user003"].balance == Decimal("-308.00")
    assert ledgers["user004"].balance == Decimal("471.08")
    assert ledgers["user005"].balance == Decimal("-10.00")
    assert ledgers["user004"].lines[-1].endswith("user004 final balance 471.08")
