import io

from bridgesolve.timer_list import TimerKind, TimerList


def _rows(text):
    return [line.split() for line in text.splitlines() if line.strip()]


def test_groups_are_named_by_kind():
    timers = TimerList()
    assert len(timers.groups) == len(TimerKind)
    assert timers.groups[TimerKind.LOOKUP].timers[0].name == "Lookup0"
    assert timers.groups[TimerKind.QT].bname == "QuickTricks"


def test_unused_list_prints_nothing():
    timers = TimerList()
    out = io.StringIO()
    timers.print_stats(out)
    assert not timers.used()
    assert out.getvalue() == ""


def test_out_of_range_group_is_ignored():
    timers = TimerList()
    timers.start(99, 0)
    timers.end(99, 0)
    timers.start(-1, 0)
    assert not timers.used()


def test_start_end_marks_used():
    timers = TimerList()
    timers.start(TimerKind.MAKE, 4)
    timers.end(TimerKind.MAKE, 4)
    assert timers.used()
    assert timers.groups[TimerKind.MAKE].timers[4].count == 1


def test_print_stats_lists_every_group():
    timers = TimerList()
    timers.start(TimerKind.EVALUATE, 2)
    timers.end(TimerKind.EVALUATE, 2)
    out = io.StringIO()
    timers.print_stats(out)
    names = [row[0] for row in _rows(out.getvalue())]
    for name in ("Name", "AB", "Make", "QuickTricks", "Build", "Sum"):
        assert name in names


def test_print_stats_exclusive_times_add_up():
    timers = TimerList()
    ab = timers.groups[TimerKind.AB].timers[3]
    ab.count, ab.user_cum = 1, 100
    make = timers.groups[TimerKind.MAKE].timers[3]
    make.count, make.user_cum = 1, 40

    out = io.StringIO()
    timers.print_stats(out)
    rows = _rows(out.getvalue())
    by_name = {}
    for row in rows:
        by_name.setdefault(row[0], row)

    ab_user = int(by_name["AB"][2])
    make_user = int(by_name["Make"][2])
    total_user = int(by_name["Sum"][2])
    assert ab_user + make_user == total_user == 100
    assert timers.groups[TimerKind.AB].timers[3].user_cum == 100


def test_print_stats_includes_ab_detail_table():
    timers = TimerList()
    ab = timers.groups[TimerKind.AB].timers[5]
    ab.count, ab.user_cum = 2, 80
    out = io.StringIO()
    timers.print_stats(out)
    text = out.getvalue()
    assert "AB1 5" in text
    assert text.count("Sum") == 2