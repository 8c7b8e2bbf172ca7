from datetime import datetime


def get_time() -> datetime:
    """Current local time, timezone-naive, as used in log archive names."""
    return datetime.now()

