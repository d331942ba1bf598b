def clamp(value, lo, hi):
    return min(max(value, lo), hi)
