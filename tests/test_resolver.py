"""Tests for relative volume changes."""

import pytest

from denon_tuner.errors import OutOfRange, QueryFailed
from denon_tuner.resolver import READ_SETTLE_FACTOR, current_volume, resolve_relative
from denon_tuner.session import COMMAND_DELAY


def test_current_volume(make_session):
    session, stream = make_session([b"MV350\rMVMAX 98\r"])
    assert current_volume(session) == 350
    assert stream.lines == [b"MV?\r\n"]


def test_current_volume_pads_two_digits(make_session):
    session, _ = make_session([b"MVMAX 98\rMV35\r"])
    assert current_volume(session) == 350


def test_current_volume_without_answer(make_session):
    session, _ = make_session([None])
    with pytest.raises(QueryFailed):
        current_volume(session)


def test_current_volume_ignores_other_lines(make_session):
    session, _ = make_session([b"PWON\rMVMAX 98\r"])
    with pytest.raises(QueryFailed):
        current_volume(session)


def test_resolve_up(clock, make_session):
    """350 + 2.5 dB * 10 = 375, after the longer post-read delay."""
    session, _ = make_session([b"MV350\r"])
    assert resolve_relative(session, 2.5) == "MV375"
    assert clock.sleeps == [pytest.approx(COMMAND_DELAY * READ_SETTLE_FACTOR)]


def test_resolve_down_strips_trailing_zero(make_session):
    session, _ = make_session([b"MV395\r"])
    assert resolve_relative(session, -3.5) == "MV36"


def test_resolve_beyond_range(make_session):
    session, _ = make_session([b"MV785\r"])
    with pytest.raises(OutOfRange):
        resolve_relative(session, 1.0)

    session, _ = make_session([b"MV005\r"])
    with pytest.raises(OutOfRange):
        resolve_relative(session, -1.0)


def test_resolve_truncates_the_sum(make_session):
    """350 - 25.5 = 324.5 is sent as 324, not 350 - 25."""
    session, _ = make_session([b"MV350\r"])
    assert resolve_relative(session, -2.55) == "MV324"


def test_resolve_zero_change_rewrites_current_level(make_session):
    session, stream = make_session([b"MV350\r"])
    assert resolve_relative(session, 0.0) == "MV35"
    assert stream.lines == [b"MV?\r\n"]
