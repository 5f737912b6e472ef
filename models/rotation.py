"""
Rotation Config Model

Contains the RotationConfig model, the single record that tracks
who hosts next.
"""

from datetime import datetime, timezone

from .base import db


def _utcnow():
    return datetime.now(timezone.utc)


class RotationConfig(db.Model):
    """
    Singleton host rotation state (one row, key 'app').

    host_rotation is the ordered list of family ids that take turns hosting.
    last_host_index points into host_rotation at the most recent host and
    starts at -1 before anyone has hosted.

    version is bumped on every UPDATE and checked in its WHERE clause, so two
    confirmations racing for the same next index cannot both commit.
    """
    key = db.Column(db.String(20), primary_key=True)
    host_rotation = db.Column(db.JSON, nullable=False, default=list)
    last_host_index = db.Column(db.Integer, nullable=False, default=-1)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    version = db.Column(db.Integer, nullable=False)

    __mapper_args__ = {'version_id_col': version}
