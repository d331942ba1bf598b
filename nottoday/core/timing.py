# Choreography timings (ms). Depth-indexed tuples are ordered depth 0..3.

HESITATION_THRESHOLD_MS = 1500
MAX_HESITATION_MS = 5000

RELEASE_TO_APPEAR_MS = 100
APPEAR_MS = 1400
BROKEN_ON_APPEAR_MS = 2000  # 400ms delay + 1600ms fade
LINGER_MS = 1000
RESET_MS = 2000
POLL_INTERVAL_MS = 50

READING_MS = (800, 700, 600, 500)
DEGRADING_MS = (3200, 2800, 2400, 2000)
SYMBOLIZING_MS = (2000, 1800, 1600, 1400)


def for_depth(table, depth: int) -> int:
    return table[min(max(int(depth), 0), len(table) - 1)]
