from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.sql import func

from ..platform.database import Base


class UserScoringWeights(Base):
    __tablename__ = "user_scoring_weights"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, unique=True, index=True)
    technical_accuracy = Column(Float, nullable=False, default=0.15)
    communication_skills = Column(Float, nullable=False, default=0.20)
    problem_solving = Column(Float, nullable=False, default=0.15)
    confidence = Column(Float, nullable=False, default=0.10)
    relevance = Column(Float, nullable=False, default=0.15)
    clarity = Column(Float, nullable=False, default=0.10)
    structure = Column(Float, nullable=False, default=0.10)
    examples = Column(Float, nullable=False, default=0.05)
    preset_name = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
