"""
Location report model
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Float, Text, Index
from app.models.database import Base


class LocationReport(Base):
    __tablename__ = "location_reports"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Identifier - at least one of these is set
    phone_number = Column(String(32), nullable=True, index=True)
    email = Column(String(255), nullable=True, index=True)

    # Location data
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    accuracy = Column(Float, nullable=True)  # meters
    speed = Column(Float, nullable=True)  # stored as reported
    address = Column(Text, nullable=True)

    # Timestamps
    recorded_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_location_reports_recent', 'recorded_at', 'id'),
    )

    def __repr__(self):
        return f"<LocationReport {self.id} {self.phone_number or self.email} at {self.recorded_at}>"
