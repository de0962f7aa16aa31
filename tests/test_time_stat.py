import pytest

from bridgesolve.time_stat import TimeStat


def test_fresh_stat_is_unused_and_prints_nothing():
    stat = TimeStat()
    assert not stat.used()
    assert stat.line() == ""


def test_set_squares_by_default():
    stat = TimeStat()
    stat.set(7)
    assert (stat.number, stat.cum) == (1, 7)
    assert stat.cumsq == pytest.approx(49.0)


def test_set_with_explicit_square():
    stat = TimeStat()
    stat.set(3, 11.5)
    assert stat.cumsq == 11.5
    assert stat.used()


def test_iadd_accumulates():
    a = TimeStat(number=1, cum=4, cumsq=16.0)
    a += TimeStat(number=2, cum=6, cumsq=20.0)
    assert (a.number, a.cum, a.cumsq) == (3, 10, 36.0)


def test_reset():
    stat = TimeStat(number=5, cum=9, cumsq=3.0)
    stat.reset()
    assert (stat.number, stat.cum, stat.cumsq) == (0, 0, 0.0)


def test_header_columns():
    assert TimeStat().header().split() == [
        "n", "Number", "Cum", "time", "Average", "Sdev", "Sdev/mu",
    ]


def test_line_for_identical_samples_has_zero_deviation():
    total = TimeStat()
    for _ in range(4):
        sample = TimeStat()
        sample.set(10)
        total += sample
    fields = total.line().split()
    assert fields[0] == str(total.number)
    assert fields[1] == str(total.cum)
    assert fields[3] == "0"
    assert float(fields[4]) == 0.0


def test_line_width_matches_header_without_index_column():
    stat = TimeStat()
    stat.set(100)
    assert len(stat.line()) + 5 == len(stat.header())