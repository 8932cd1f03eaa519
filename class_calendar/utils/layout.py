# class_calendar/utils/layout.py
from typing import List, Optional

from class_calendar.schemas.calendar import CalendarBlock, HourRow, LayoutBox
from class_calendar.schemas.enrollment import DAY_ORDER
from class_calendar.utils.conflict import find_conflicting_ids, time_window
from class_calendar.utils.timeparse import format_hour_label, format_minutes


class CalendarLayout:
    """Maps records onto a Mon..Sun grid covering [start_hour, end_hour].

    Positions are not clipped to the window: a class before start_hour gets a
    negative top, one running past end_hour extends below the grid. Clipping
    or scrolling is left to whoever draws the grid.

    Overlapping classes on the same day get the same column and simply
    overlap; the conflict flag on each block is what marks them.
    """

    columns = DAY_ORDER

    def __init__(self, start_hour: int = 8, end_hour: int = 22, unit_height: float = 60) -> None:
        if not (0 <= start_hour < end_hour <= 24):
            raise ValueError(f"Invalid calendar window: {start_hour}-{end_hour}")
        if unit_height <= 0:
            raise ValueError("unit_height must be positive")
        self.start_hour = start_hour
        self.end_hour = end_hour
        self.unit_height = unit_height

    @property
    def grid_height(self) -> float:
        return (self.end_hour - self.start_hour) * self.unit_height

    def layout(self, record) -> Optional[LayoutBox]:
        win = time_window(record)
        if win is None:
            return None
        day, s, e = win
        return LayoutBox(
            column=day,
            top=(s / 60 - self.start_hour) * self.unit_height,
            height=((e - s) / 60) * self.unit_height,
        )

    def hour_rows(self) -> List[HourRow]:
        return [
            HourRow(hour=h, label=format_hour_label(h))
            for h in range(self.start_hour, self.end_hour + 1)
        ]

    def blocks(self, records) -> List[CalendarBlock]:
        records = list(records)
        conflicted = find_conflicting_ids(records)
        out = []
        for r in records:
            win = time_window(r)
            if win is None:
                continue
            box = self.layout(r)
            out.append(
                CalendarBlock(
                    id=r.id,
                    column=box.column,
                    top=box.top,
                    height=box.height,
                    course_code=r.course_code,
                    course_name=r.course_name,
                    start=format_minutes(win[1]),
                    end=format_minutes(win[2]),
                    location=r.location,
                    conflict=r.id in conflicted,
                )
            )
        return out
