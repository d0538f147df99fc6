from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func

from beacon.core.db import Base


class AppSnapshot(Base):
    __tablename__ = "app_snapshots"

    key = Column(String(64), primary_key=True)
    # сериализованная коллекция страниц целиком
    payload = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
