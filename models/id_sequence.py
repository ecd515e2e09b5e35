from sqlalchemy import Column, Integer, String
from core.database import Base


class IdSequence(Base):
    """Last identifier handed out per collection."""

    __tablename__ = "id_sequences"

    collection = Column(String, primary_key=True)
    last_id = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<IdSequence {self.collection}={self.last_id}>"
