"""
Reminder and alert models.
"""
from ekheti.extensions import db

REMINDER_KINDS = ('farming', 'crop', 'fruit')
ALERT_CONDITIONS = ('above', 'below')


class Reminder(db.Model):
    """A dated task; `kind` separates the farming list from the crop and fruit calendars."""
    __tablename__ = 'reminders'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    kind = db.Column(db.String(10), nullable=False, default='farming')
    task = db.Column(db.String(200), nullable=False)
    date = db.Column(db.Date, nullable=False)

    user = db.relationship('User', back_populates='reminders')

    def to_dict(self):
        return {'id': self.id, 'kind': self.kind, 'task': self.task, 'date': self.date.isoformat()}


class PriceAlert(db.Model):
    __tablename__ = 'price_alerts'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    crop = db.Column(db.String(100), nullable=False)
    threshold = db.Column(db.Float, nullable=False)
    condition = db.Column(db.String(5), nullable=False)  # above, below

    user = db.relationship('User', back_populates='price_alerts')

    def is_triggered_by(self, price):
        if self.condition == 'above':
            return price > self.threshold
        return price < self.threshold

    def to_dict(self):
        return {'id': self.id, 'crop': self.crop, 'threshold': self.threshold, 'condition': self.condition}


class WeatherAlertSettings(db.Model):
    __tablename__ = 'weather_alert_settings'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False)
    rain = db.Column(db.Boolean, default=False, nullable=False)
    frost = db.Column(db.Boolean, default=False, nullable=False)
    high_wind = db.Column(db.Boolean, default=False, nullable=False)

    @classmethod
    def for_user(cls, user):
        settings = cls.query.filter_by(user_id=user.id).first()
        if settings is None:
            settings = cls(user_id=user.id, rain=False, frost=False, high_wind=False)
            db.session.add(settings)
        return settings

    def to_dict(self):
        return {'rain': self.rain, 'frost': self.frost, 'highWind': self.high_wind}
