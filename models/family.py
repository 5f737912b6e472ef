"""
Family Model

Contains the Family model for the participant groups that share
the Sunday dinner.
"""

from .base import db


class Family(db.Model):
    """Participant family with display metadata."""
    id = db.Column(db.String(20), primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    emoji = db.Column(db.String(16), default='')
    color = db.Column(db.String(16), default='')
    position = db.Column(db.Integer, nullable=False, default=0)  # Display order, not rotation order
