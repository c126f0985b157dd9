"""
SQLAlchemy models for stored analyses and the provider catalog
"""
from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, String, Boolean, DateTime, Integer, SmallInteger, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship

from health_analyzer.db import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthAnalysis(Base):
    """Base row shared by every analysis type"""
    __tablename__ = "health_analyses"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=True, index=True)
    analysis_type = Column(String(16), nullable=False, index=True)
    image_url = Column(Text, nullable=True)
    raw_analysis = Column(Text, nullable=False)
    concerns = Column(JSON, nullable=False, default=list)
    recommendations = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=_utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=True)

    dental = relationship("DentalAnalysis", uselist=False, cascade="all, delete-orphan")
    skin = relationship("SkinAnalysis", uselist=False, cascade="all, delete-orphan")
    posture = relationship("PostureAnalysis", uselist=False, cascade="all, delete-orphan")
    nutrition = relationship("NutritionAnalysis", uselist=False, cascade="all, delete-orphan")
    stool = relationship("StoolAnalysis", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        return f"<HealthAnalysis(id='{self.id}', type='{self.analysis_type}', user='{self.user_id}')>"


def _parent_key():
    return Column(String(36), ForeignKey("health_analyses.id", ondelete="CASCADE"), primary_key=True)


class DentalAnalysis(Base):
    __tablename__ = "dental_analyses"

    id = _parent_key()
    dental_issues = Column(JSON, nullable=False, default=list)
    oral_hygiene_score = Column(SmallInteger, nullable=True)
    dentist_recommendation = Column(Boolean, default=False, nullable=False)


class SkinAnalysis(Base):
    __tablename__ = "skin_analyses"

    id = _parent_key()
    skin_conditions = Column(JSON, nullable=False, default=list)
    severity_score = Column(SmallInteger, nullable=True)
    dermatologist_recommendation = Column(Boolean, default=False, nullable=False)


class PostureAnalysis(Base):
    __tablename__ = "posture_analyses"

    id = _parent_key()
    posture_issues = Column(JSON, nullable=False, default=list)
    posture_score = Column(SmallInteger, nullable=True)
    exercise_recommendations = Column(JSON, nullable=False, default=list)


class NutritionAnalysis(Base):
    __tablename__ = "nutrition_analyses"

    id = _parent_key()
    food_items = Column(JSON, nullable=False, default=list)
    calories = Column(Integer, nullable=True)
    protein = Column(Integer, nullable=True)
    carbs = Column(Integer, nullable=True)
    fat = Column(Integer, nullable=True)
    fiber = Column(Integer, nullable=True)
    health_score = Column(SmallInteger, nullable=True)
    vitamins = Column(JSON, nullable=False, default=dict)


class StoolAnalysis(Base):
    __tablename__ = "stool_analyses"

    id = _parent_key()
    stool_type = Column(SmallInteger, nullable=True)
    abnormalities = Column(JSON, nullable=False, default=list)
    hydration_indicator = Column(String(8), nullable=True)
    doctor_recommendation = Column(Boolean, default=False, nullable=False)


class HealthcareProvider(Base):
    __tablename__ = "healthcare_providers"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    specialty = Column(String, nullable=False, index=True)
    location = Column(Text, nullable=True)
    contact = Column(Text, nullable=True)
    website = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    def __repr__(self):
        return f"<HealthcareProvider(name='{self.name}', specialty='{self.specialty}')>"
