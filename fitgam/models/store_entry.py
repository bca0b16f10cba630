# fitgam/models/store_entry.py
from datetime import datetime
from .. import db


class StoreEntry(db.Model):
    """
    One keyed collection of the local store, kept as JSON text.
    """
    __tablename__ = "store_entries"

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
