"""End-to-end batches against a scripted receiver."""

import pytest

from denon_tuner.controller import CommandResult, parse_commands, report, run_commands
from denon_tuner.errors import InvalidCommand, QueryFailed
from denon_tuner.protocol.commands import parse_command
from denon_tuner.session import COMMAND_DELAY


def run(session, texts, verbose=False):
    lines = []
    results = run_commands(session, parse_commands(texts), verbose=verbose, emit=lines.append)
    return results, lines


def test_power_input_volume_batch(make_session):
    session, stream = make_session([b"PWON\r", b"SITV\r", b"MV395\r"])
    results, lines = run(session, ["POWER=ON", "INPUT=TV", "VOLUME=-40.5 dB"], verbose=True)

    assert lines == [
        "tuner: POWER = ON",
        "tuner: INPUT = TV",
        "tuner: VOLUME = -40.5 dB",
    ]
    assert stream.lines == [b"PWON\r\n", b"SITV\r\n", b"MV395\r\n"]
    times = [when for when, _ in stream.writes]
    for earlier, later in zip(times, times[1:]):
        assert later - earlier >= COMMAND_DELAY - 1e-9
    assert not any(result.failed for result in results)


def test_set_commands_are_quiet_unless_verbose(make_session):
    session, _ = make_session([b"PWON\r", b"SITV\r"])
    _, lines = run(session, ["POWER=ON", "INPUT=TV"])
    assert lines == []


def test_queries_always_print(make_session):
    session, _ = make_session([b"MV080\r"])
    _, lines = run(session, ["VOLUME=QUERY"])
    assert lines == ["tuner: VOLUME = -72.0 dB"]


def test_relative_change_sends_absolute_level(clock, make_session):
    session, stream = make_session([b"MV350\r", b"MV375\r"])
    run(session, ["VOLUME=UP2.5"])

    assert stream.lines == [b"MV?\r\n", b"MV375\r\n"]
    (query_time, _), (set_time, _) = stream.writes
    # the query reply arrives at once, so it completed when it was sent
    assert set_time - query_time >= COMMAND_DELAY * 1.5 - 1e-9


def test_query_without_reply_is_reported_and_batch_continues(make_session):
    session, stream = make_session([None, b"SITV\r"])
    results, lines = run(session, ["POWER", "INPUT"])

    assert lines == ["tuner: POWER = FAIL!", "tuner: INPUT = TV"]
    assert results[0].failed
    assert not results[1].failed
    assert len(stream.writes) == 2


def test_set_without_reply_is_not_a_failure(make_session):
    session, _ = make_session([None])
    results, lines = run(session, ["MUTE"])
    assert lines == []
    assert results[0].no_reply
    assert not results[0].failed


def test_failed_volume_read_stops_the_batch(make_session):
    session, stream = make_session([None, b"PWON\r"])
    with pytest.raises(QueryFailed):
        run(session, ["VOLUME=DOWN5", "POWER=ON"])
    assert stream.lines == [b"MV?\r\n"]


def test_bad_command_rejected_before_sending():
    with pytest.raises(InvalidCommand):
        parse_commands(["POWER=ON", "INPUT=RADIO"])


def test_report_uses_verb_for_failure():
    lines = []
    result = CommandResult(command=parse_command("VOL"), raw="MV?", no_reply=True)
    report(result, emit=lines.append)
    assert lines == ["tuner: VOLUME = FAIL!"]
