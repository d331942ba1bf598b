from nottoday.observability.logging import log
from nottoday.settings import settings
from nottoday.store.kv import KeyValueStore
from nottoday.store.models import DepthState

MAX_DEPTH = 3


def _parse_depth_state(depth_raw: str, pull_raw: str) -> DepthState:
    """
    Decimal-integer strings -> DepthState.
    Raises ValueError for anything outside depth 0..3 / pullCount >= 0.
    """
    depth = int(depth_raw, 10)
    pull_count = int(pull_raw, 10)
    if not 0 <= depth <= MAX_DEPTH or pull_count < 0:
        raise ValueError(f"out of range depth={depth} pullCount={pull_count}")
    return DepthState(depth=depth, pullCount=pull_count)


def load_depth_state(store: KeyValueStore) -> DepthState:
    """
    Never raises: a missing key, a corrupt value or an unreachable store all
    yield the default state.
    """
    try:
        depth_raw = store.get(settings.DEPTH_KEY)
        pull_raw = store.get(settings.PULL_COUNT_KEY)
    except Exception as e:
        log(event="depth_state_load_failed", error=str(e))
        return DepthState()

    if not depth_raw or not pull_raw:
        return DepthState()

    try:
        return _parse_depth_state(depth_raw, pull_raw)
    except ValueError as e:
        log(event="depth_state_corrupt", depthRaw=depth_raw, pullCountRaw=pull_raw, error=str(e))
        return DepthState()


def save_depth_state(store: KeyValueStore, state: DepthState) -> bool:
    try:
        store.set_many({
            settings.DEPTH_KEY: str(int(state.depth)),
            settings.PULL_COUNT_KEY: str(int(state.pullCount)),
        })
        return True
    except Exception as e:
        log(event="depth_state_save_failed", depth=state.depth, pullCount=state.pullCount, error=str(e))
        return False
