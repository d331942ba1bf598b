"""
Seed the persisted depth counters in Redis, e.g. to jump straight to
depth 3 and watch the broken pattern without pressing twenty times.
Idempotent; safe to run in local/dev/CI.

    SEED_DEPTH=3 SEED_PULL_COUNT=25 python scripts/seed_depth.py
"""
import os
from redis import Redis

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
DEPTH_KEY = os.getenv("DEPTH_KEY", "not_today_depth")
PULL_COUNT_KEY = os.getenv("PULL_COUNT_KEY", "not_today_pull_count")

DEPTH = int(os.getenv("SEED_DEPTH", "3"))
PULL_COUNT = int(os.getenv("SEED_PULL_COUNT", "25"))

def main(depth: int = DEPTH, pull_count: int = PULL_COUNT):
    assert 0 <= depth <= 3, f"depth out of range: {depth}"
    assert pull_count >= 0, f"pullCount out of range: {pull_count}"
    r = Redis.from_url(REDIS_URL, decode_responses=True)
    r.mset({DEPTH_KEY: str(depth), PULL_COUNT_KEY: str(pull_count)})
    print(f"OK: depth={depth} pullCount={pull_count} into {REDIS_URL}")

if __name__ == "__main__":
    main()
