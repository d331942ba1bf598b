#!/usr/bin/env python3
import sys
import os

print("Running preflight import check...")
try:
    # Memory store so the check never needs a live Redis
    os.environ.setdefault("STORE_BACKEND", "memory")

    import nottoday.main
    print("Import nottoday.main: OK")

    from nottoday.core.dictionary import load_dictionary
    words = load_dictionary()
    print(f"Dictionary: {len(words)} words")

    print("Preflight check passed.")
    sys.exit(0)
except Exception as e:
    print(f"Preflight check FAILED: {e}")
    import traceback
    traceback.print_exc()
    sys.exit(1)
