"""Selftests for app.time_entry

Run:
  python -m selftest.test_time_entry
"""

from app.time_entry import HINT_MS, MAX_CHARS, TimeEntry, parse_time_string


def test_parse_valid():
    assert parse_time_string("9:05") == (9, 5, 0)
    assert parse_time_string("09:05:30") == (9, 5, 30)
    assert parse_time_string("0:0") == (0, 0, 0)
    assert parse_time_string("23:59:59") == (23, 59, 59)
    # lenient leading sign, like a base-10 integer prefix parse
    assert parse_time_string("+5:00") == (5, 0, 0)
    assert parse_time_string(" 7x:3") == (7, 3, 0)


def test_parse_invalid():
    for bad in ("25:00", "12:60", "1:2:60", "9:5:5:5", "", "12", ":", "ab:cd", None, "-5:00"):
        assert parse_time_string(bad) is None, bad
    # only ASCII digits count; other Unicode digits are rejected without raising
    assert parse_time_string("\u00b2:00") is None
    assert parse_time_string("\u0661\u0662:\u0663\u0660") is None
    assert parse_time_string("12:\u0663\u0660") is None


def test_buffer_limits_and_charset():
    e = TimeEntry()
    e.open(0.0)
    for ch in "12:34:56:78":
        e.type_char(ch)
    assert len(e.buffer) == MAX_CHARS
    assert e.buffer == "12:34:56"
    assert e.type_char("x") is False
    e.backspace()
    assert e.buffer == "12:34:5"
    e.backspace()
    e.backspace()
    assert e.buffer == "12:34"


def test_submit_success_closes():
    e = TimeEntry()
    e.open(0.0)
    for ch in "7:08":
        e.type_char(ch)
    assert e.submit(10.0) == (7, 8, 0)
    assert not e.active and e.buffer == ""


def test_submit_failure_keeps_buffer_and_shows_hint():
    e = TimeEntry()
    e.open(0.0)
    for ch in "99:00":
        e.type_char(ch)
    assert e.submit(1000.0) is None
    assert e.active and e.buffer == "99:00"
    assert e.hint_visible(1000.0 + HINT_MS / 2.0)
    assert not e.hint_visible(1000.0 + HINT_MS + 1.0)


def test_hint_hidden_for_empty_or_valid():
    e = TimeEntry()
    e.open(0.0)
    assert not e.hint_visible(1.0)
    for ch in "1:02":
        e.type_char(ch)
    assert not e.hint_visible(1.0)


def main():
    test_parse_valid()
    test_parse_invalid()
    test_buffer_limits_and_charset()
    test_submit_success_closes()
    test_submit_failure_keeps_buffer_and_shows_hint()
    test_hint_hidden_for_empty_or_valid()
    print("OK: time_entry selftests passed")


if __name__ == "__main__":
    main()
