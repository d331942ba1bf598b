from nottoday.core.prng import LcgStream, lcg_value


def test_same_seed_same_sequence():
    a = LcgStream(1234)
    b = LcgStream(1234)
    assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]


def test_recurrence_values():
    s = LcgStream(0)
    assert s.next() == 49297 / 233280
    assert s.seed == 49297
    assert s.next() == 165494 / 233280


def test_streams_do_not_share_state():
    a = LcgStream(7)
    b = LcgStream(7)
    a.next()
    a.next()
    assert b.next() == LcgStream(7).next()


def test_values_in_unit_interval():
    s = LcgStream(99)
    for _ in range(500):
        v = s()
        assert 0 <= v < 1


def test_lcg_value_is_first_draw():
    assert lcg_value(42) == LcgStream(42).next()


def test_float_seed_supported():
    a = LcgStream(1234.5)
    b = LcgStream(1234.5)
    assert a.next() == b.next()
