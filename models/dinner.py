"""
Dinner Models

Contains the Dinner, DinnerResponse and MealLog models for one
Sunday occurrence, the families' answers for it and what was eaten.
"""

from datetime import datetime, timezone

from .base import db


def _utcnow():
    return datetime.now(timezone.utc)


class Dinner(db.Model):
    """One dinner occurrence, keyed by its YYYY-MM-DD date. Created on first interaction."""
    date_key = db.Column(db.String(10), primary_key=True)
    confirmed = db.Column(db.Boolean, nullable=False, default=False)
    host_id = db.Column(db.String(20), db.ForeignKey('family.id'), nullable=True, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    # Optimistic concurrency counter, checked on every UPDATE
    version = db.Column(db.Integer, nullable=False)
    responses = db.relationship('DinnerResponse', backref='dinner', lazy=True, cascade='all, delete-orphan')
    meal_log = db.relationship('MealLog', backref='dinner', uselist=False, cascade='all, delete-orphan')
    host = db.relationship('Family')

    __mapper_args__ = {'version_id_col': version}


class DinnerResponse(db.Model):
    """A family's answer for one dinner: 'available' or 'declined'. No row means unset."""
    id = db.Column(db.Integer, primary_key=True)
    dinner_date = db.Column(db.String(10), db.ForeignKey('dinner.date_key', ondelete='CASCADE'), nullable=False, index=True)
    family_id = db.Column(db.String(20), db.ForeignKey('family.id', ondelete='CASCADE'), nullable=False)
    state = db.Column(db.String(10), nullable=False)

    # One answer per family per dinner, so available and declined never overlap
    __table_args__ = (db.UniqueConstraint('dinner_date', 'family_id', name='uq_dinner_response_family'),)


class MealLog(db.Model):
    """What was eaten at a dinner. Replaced as a whole on every save."""
    dinner_date = db.Column(db.String(10), db.ForeignKey('dinner.date_key', ondelete='CASCADE'), primary_key=True)
    what = db.Column(db.String(200), nullable=False)
    recipe = db.Column(db.String(500), default='')
    notes = db.Column(db.Text, default='')
    rating = db.Column(db.Integer, nullable=False)
    how = db.Column(db.String(10), nullable=False)  # 'cooked' or 'ordered'
    saved_at = db.Column(db.DateTime(timezone=True), nullable=False)
