import json
import time
from nottoday.settings import settings

# Fields that carry the user-visible word text
SENSITIVE_KEYS = {"word", "chars", "brokenChars"}

def _redact_value(v):
    if isinstance(v, str) and len(v) > 0:
        return f"[REDACTED:{len(v)}chars]"
    if isinstance(v, list):
        return f"[REDACTED:{len(v)}chars]"
    return v

def log(event: str, **fields):
    payload = {"ts": int(time.time()), "event": event}

    if not settings.LOG_WORDS:
        clean_fields = {}
        for k, v in fields.items():
            if k in SENSITIVE_KEYS:
                clean_fields[k] = _redact_value(v)
            else:
                clean_fields[k] = v
        payload.update(clean_fields)
    else:
        payload.update(fields)

    print(json.dumps(payload, ensure_ascii=False))
