#!/usr/bin/env python3
"""
Run press/release cycles on a virtual clock with an in-memory store and print
the phase trace. No Redis, no waiting.

    python scripts/simulate_cycle.py 6 2500   # six cycles, 2.5s presses
"""
import sys

from nottoday.core.controller import InteractionController
from nottoday.core.dictionary import load_dictionary
from nottoday.store.kv import MemoryStore
from nottoday.utils.timers import ManualScheduler


def simulate(cycles: int = 5, press_ms: int = 500):
    scheduler = ManualScheduler()
    controller = InteractionController(scheduler, MemoryStore(), load_dictionary())
    traces = []

    for _ in range(cycles):
        trace = []
        unsubscribe = controller.subscribe(lambda state, t=trace: t.append(state.phase))
        controller.pointer_down()
        scheduler.advance(press_ms)
        controller.pointer_up()
        scheduler.run_until_idle()
        traces.append((controller.depth_state, list(trace)))
        unsubscribe()

    return traces


def main():
    cycles = int(sys.argv[1]) if len(sys.argv) > 1 else 5
    press_ms = int(sys.argv[2]) if len(sys.argv) > 2 else 500
    for i, (state, trace) in enumerate(simulate(cycles, press_ms), start=1):
        print(f"cycle {i}: depth={state.depth} pullCount={state.pullCount}")
        print("  " + " -> ".join(trace))


if __name__ == "__main__":
    main()
