"""
Expense tracker models: one tracker per crop, each holding transactions.
"""
from ekheti.extensions import db

TRANSACTION_TYPES = ('income', 'expense')
CURRENCIES = ('INR', 'USD', 'EUR')


class CropTracker(db.Model):
    __tablename__ = 'crop_trackers'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now())

    # Relationships
    user = db.relationship('User', back_populates='crop_trackers')
    transactions = db.relationship('Transaction', back_populates='tracker', lazy='dynamic',
                                   cascade='all, delete-orphan')

    def to_dict(self):
        return {'id': self.id, 'name': self.name}


class Transaction(db.Model):
    __tablename__ = 'transactions'

    id = db.Column(db.Integer, primary_key=True)
    tracker_id = db.Column(db.Integer, db.ForeignKey('crop_trackers.id'), nullable=False)
    type = db.Column(db.String(10), nullable=False)  # income, expense
    amount = db.Column(db.Float, nullable=False)
    currency = db.Column(db.String(3), nullable=False, default='INR')
    category = db.Column(db.String(100), nullable=False)
    date = db.Column(db.Date, nullable=False)
    description = db.Column(db.Text, default='')
    created_at = db.Column(db.DateTime, default=db.func.now())

    tracker = db.relationship('CropTracker', back_populates='transactions')

    def to_dict(self):
        return {
            'id': self.id,
            'cropId': self.tracker_id,
            'type': self.type,
            'amount': self.amount,
            'currency': self.currency,
            'category': self.category,
            'date': self.date.isoformat(),
            'description': self.description or '',
        }
