"""
Named counters backing human-readable business codes (DRV-001, TR-2024-003).
"""

from sqlalchemy import Column, Integer, String
from fleet_backend.app.db.session import Base


class SequenceCounter(Base):
    __tablename__ = "sequence_counters"

    name = Column(String(50), primary_key=True)
    value = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<SequenceCounter(name='{self.name}', value={self.value})>"
