from sqlalchemy import Column, String, Text, DateTime, func
from class_calendar.database import Base

class KvBlob(Base):
    __tablename__ = "kv_blobs"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=False), server_default=func.now(), onupdate=func.now(), nullable=False)
