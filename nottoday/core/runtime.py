from typing import Optional, Sequence

from nottoday.core.controller import InteractionController
from nottoday.core.dictionary import load_dictionary
from nottoday.core.haptics import QueuedVibrator
from nottoday.settings import settings
from nottoday.store.kv import KeyValueStore, get_store
from nottoday.utils.timers import Scheduler


def build_controller(
    scheduler: Scheduler,
    store: Optional[KeyValueStore] = None,
    words: Optional[Sequence[str]] = None,
    vibrator=None,
) -> InteractionController:
    """Wire the controller from settings; explicit arguments win."""
    if store is None:
        store = get_store()
    if words is None:
        words = load_dictionary()
    if vibrator is None and settings.HAPTICS_ENABLED:
        vibrator = QueuedVibrator()
    return InteractionController(scheduler, store, words, vibrator=vibrator)
