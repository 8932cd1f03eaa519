# class_calendar/utils/timeparse.py
import re
from typing import Optional

_HHMM = re.compile(r"^(\d{2}):(\d{2})$")


def parse_time(text) -> Optional[int]:
    """
    "09:30" -> 570 (minutes since 00:00)

    Only the exact HH:MM shape is accepted; anything else (including
    "9:30", "24:00", "12:60") gives None.
    """
    if not isinstance(text, str):
        return None
    m = _HHMM.match(text.strip())
    if not m:
        return None
    h, mi = int(m.group(1)), int(m.group(2))
    if h > 23 or mi > 59:
        return None
    return h * 60 + mi


def format_minutes(minutes: int) -> str:
    """570 -> "09:30" """
    if not 0 <= minutes < 24 * 60:
        raise ValueError(f"minutes out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_hour_label(hour: int) -> str:
    # 8 -> "8:00 AM", 12 -> "12:00 PM", 0 -> "12:00 AM"
    ampm = "PM" if hour % 24 >= 12 else "AM"
    hour12 = (hour + 11) % 12 + 1
    return f"{hour12}:00 {ampm}"
