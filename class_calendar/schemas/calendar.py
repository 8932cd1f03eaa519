from pydantic import BaseModel

class LayoutBox(BaseModel):
    column: str
    top: float
    height: float

class CalendarBlock(BaseModel):
    id: str
    column: str
    top: float
    height: float
    course_code: str = ""
    course_name: str = ""
    start: str
    end: str
    location: str = ""
    conflict: bool = False

class HourRow(BaseModel):
    hour: int
    label: str  # "8:00 AM"
