import pytest
from nottoday.core import state_machine as sm
from nottoday.core.dictionary import EmptyDictionaryError
from nottoday.core.word_engine import WordLifecycleEngine, pick_tail_length
from nottoday.utils.timers import ManualScheduler


class SeqRng:
    def __init__(self, *values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


@pytest.mark.parametrize("values,expected", [
    ((0.49,), 1),
    ((0.5, 0.0), 1),
    ((0.5, 0.99), 3),
    ((0.7, 0.5), 2),
])
def test_tail_length_depth_three(values, expected):
    assert pick_tail_length(3, SeqRng(*values)) == expected


@pytest.mark.parametrize("depth", [0, 1, 2])
def test_tail_length_other_depths(depth):
    assert pick_tail_length(depth, SeqRng(0.0)) == 1
    assert pick_tail_length(depth, SeqRng(0.999)) == 5


def test_empty_dictionary_is_fatal():
    with pytest.raises(EmptyDictionaryError):
        WordLifecycleEngine(ManualScheduler(), [])


def _engine(words=("not today",)):
    s = ManualScheduler(start_ms=1000)
    e = WordLifecycleEngine(s, words)
    signals = []
    e.bind(lambda sig, gen: signals.append((sig, gen)))
    return s, e, signals


def test_released_selects_word_once():
    s, e, _ = _engine()
    e.on_phase(sm.PhaseState(sm.RELEASED, 1, s.now_ms()), depth=0)
    cycle = e.cycle
    assert cycle.word == "not today"
    assert 1 <= cycle.tailLength <= 5
    assert cycle.degradingProgress == 0 and cycle.symbolizingProgress == 0

    e.on_phase(sm.PhaseState(sm.WORD_APPEARING, 2, s.now_ms()), depth=0)
    assert e.cycle is cycle


def test_appearing_signals_visible_after_delay():
    s, e, signals = _engine()
    e.on_phase(sm.PhaseState(sm.RELEASED, 1, s.now_ms()), depth=0)
    e.on_phase(sm.PhaseState(sm.WORD_APPEARING, 2, s.now_ms()), depth=0)
    s.advance(1399)
    assert signals == []
    s.advance(1)
    assert signals == [(sm.SIG_VISIBLE, 2)]


def test_new_phase_cancels_previous_timers():
    s, e, signals = _engine()
    e.on_phase(sm.PhaseState(sm.WORD_APPEARING, 2, s.now_ms()), depth=0)
    s.advance(500)
    e.on_phase(sm.PhaseState(sm.IDLE, 3, s.now_ms()), depth=0)
    s.advance(5000)
    assert signals == []
    assert e.cycle is None
    assert s.pending() == 0


@pytest.mark.parametrize("depth,delay", [(0, 800), (1, 700), (2, 600), (3, 500)])
def test_reading_delay_by_depth(depth, delay):
    s, e, signals = _engine()
    e.on_phase(sm.PhaseState(sm.RELEASED, 1, s.now_ms()), depth=depth)
    e.on_phase(sm.PhaseState(sm.WORD_VISIBLE, 2, s.now_ms()), depth=depth)
    s.advance(delay - 1)
    assert signals == []
    s.advance(1)
    assert signals == [(sm.SIG_READING_DETECTED, 2)]


def test_reading_detected_hands_off_without_delay():
    s, e, signals = _engine()
    e.on_phase(sm.PhaseState(sm.READING_DETECTED, 4, s.now_ms()), depth=0)
    s.advance(0)
    assert signals == [(sm.SIG_DEGRADE_NOW, 4)]


def test_degrading_progress_leaves_characters_alone():
    s, e, signals = _engine()
    e.on_phase(sm.PhaseState(sm.RELEASED, 1, s.now_ms()), depth=2)
    e.on_phase(sm.PhaseState(sm.WORD_DEGRADING, 5, s.now_ms()), depth=2)
    s.advance(1200)
    assert e.cycle.degradingProgress == pytest.approx(0.5)
    assert e.render_chars() == list("not today")
    s.advance(1199)
    assert signals == []
    s.advance(1)
    assert signals == [(sm.SIG_SYMBOLIZED, 5)]
    assert e.cycle.degradingProgress == 1.0


def test_symbolized_lingers_before_reset():
    s, e, signals = _engine()
    e.on_phase(sm.PhaseState(sm.RELEASED, 1, s.now_ms()), depth=3)
    e.on_phase(sm.PhaseState(sm.SYMBOLIZED, 6, s.now_ms()), depth=3)
    s.advance(1400)
    assert e.cycle.symbolizingProgress == 1.0
    s.advance(999)
    assert signals == []
    s.advance(1)
    assert signals == [(sm.SIG_RESET, 6)]


def test_reset_clears_word_then_signals():
    s, e, signals = _engine()
    e.on_phase(sm.PhaseState(sm.RELEASED, 1, s.now_ms()), depth=0)
    e.on_phase(sm.PhaseState(sm.RESET_TO_CIRCLE, 8, s.now_ms()), depth=0)
    s.advance(1999)
    assert e.cycle is not None
    s.advance(1)
    assert e.cycle is None
    assert signals == [(sm.SIG_DECAY_COMPLETE, 8)]


def test_broken_on_appear_renders_corrupted_form():
    from nottoday.core.symbols import apply_broken_pattern, broken_seed

    s, e, signals = _engine()
    e.on_phase(sm.PhaseState(sm.RELEASED, 1, s.now_ms()), depth=3)
    e.on_phase(sm.PhaseState(sm.BROKEN_ON_APPEAR, 2, s.now_ms()), depth=3)
    expected = apply_broken_pattern("not today", 3, broken_seed("not today", 3))
    assert e.render_chars() == expected
    s.advance(2000)
    assert signals == [(sm.SIG_BROKEN_SHOWN, 2)]


def test_render_without_word_is_empty():
    _, e, _ = _engine()
    assert e.render_chars() == []
