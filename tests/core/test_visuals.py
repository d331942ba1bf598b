import math
from nottoday.core import state_machine as sm
from nottoday.core.visuals import broken_char_opacity, char_styles, derive_visuals, shake_intensity


def test_shake_intensity_by_depth():
    assert [shake_intensity(d) for d in range(4)] == [1.0, 1.5, 2.0, 2.5]


def test_circle_and_word_visibility():
    idle = derive_visuals(phase=sm.IDLE, depth=0)
    assert idle["circleVisible"] and idle["breathing"] and not idle["breathingFast"]
    assert not idle["wordShown"]

    pressing = derive_visuals(phase=sm.PRESSING, depth=0)
    assert pressing["breathingFast"]

    released = derive_visuals(phase=sm.RELEASED, depth=0)
    assert not released["circleVisible"] and not released["wordShown"]

    assert derive_visuals(phase=sm.SYMBOLIZED, depth=3)["wordShown"]


def test_broken_opacity_wave():
    assert broken_char_opacity(0) == 0.7
    assert math.isclose(broken_char_opacity(3), 0.7 + math.sin(1.5) * 0.15)


def test_tail_shadow_only_near_end():
    early = char_styles(sm.SYMBOLIZED, 6, 4, 0.5)
    assert not any(s["shadow"] for s in early)

    late = char_styles(sm.SYMBOLIZED, 6, 4, 0.9)
    # shadow limited to the last min(3, tail) characters
    assert [s["shadow"] for s in late] == [False, False, False, True, True, True]
    assert [s["tail"] for s in late] == [False, False, True, True, True, True]
    assert late[5]["opacity"] == 0.7
    assert late[0]["opacity"] == 0.9
    assert late[5]["legible"] is True

    done = char_styles(sm.SYMBOLIZED, 6, 4, 0.96)
    assert done[5]["legible"] is False
