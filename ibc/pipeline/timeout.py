BASE_PER_TASK = 10
PER_LEVEL_FACTOR = 5

def estimate_timeout(
    count: int,
    level: int,
    base_per_task: int = BASE_PER_TASK,
    per_level_factor: int = PER_LEVEL_FACTOR,
) -> int:
    """Seconds allowed for the whole batch to finish.

    Higher levels make optipng slower, so the budget grows with both the
    number of files and the level. It bounds the aggregate wait only, never
    a single task.
    """
    if count < 0:
        raise ValueError(f"Task count must not be negative, got {count}")
    return count * base_per_task + count * level * per_level_factor
