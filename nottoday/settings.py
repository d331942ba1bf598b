import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    API_KEY: str = os.getenv("API_KEY", "")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Persistence collaborator
    # - "redis": durable counters in Redis (default)
    # - "memory": process-local dict, lost on restart (tests / offline demo)
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "redis").lower()
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Key names kept identical to the browser build so an exported localStorage dump can be seeded as-is
    DEPTH_KEY: str = os.getenv("DEPTH_KEY", "not_today_depth")
    PULL_COUNT_KEY: str = os.getenv("PULL_COUNT_KEY", "not_today_pull_count")

    # Dictionary collaborator: one word per line (UTF-8). Empty -> bundled list.
    WORDS_FILE: str = os.getenv("WORDS_FILE", "")

    # Haptics: patterns are queued for the client to drain from /haptics
    HAPTICS_ENABLED: bool = os.getenv("HAPTICS_ENABLED", "true").lower() == "true"

    # Log hygiene: when false, selected words are redacted in log lines
    LOG_WORDS: bool = os.getenv("LOG_WORDS", "true").lower() == "true"

settings = Settings()
