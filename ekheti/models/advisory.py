"""
Last advisory per user and item type, so the advisory page can show it again.
"""
import json

from ekheti.extensions import db


class SavedAdvisory(db.Model):
    __tablename__ = 'saved_advisories'
    __table_args__ = (db.UniqueConstraint('user_id', 'item_type', name='unique_user_advisory'),)

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    item_type = db.Column(db.String(10), nullable=False)  # Crop, Fruit
    payload = db.Column(db.Text, nullable=False)  # JSON
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now())

    @classmethod
    def remember(cls, user, item_type, result):
        saved = cls.query.filter_by(user_id=user.id, item_type=item_type).first()
        if saved is None:
            saved = cls(user_id=user.id, item_type=item_type)
            db.session.add(saved)
        saved.payload = json.dumps(result)
        return saved

    @classmethod
    def recall(cls, user, item_type):
        saved = cls.query.filter_by(user_id=user.id, item_type=item_type).first()
        return json.loads(saved.payload) if saved else None
