"""
User model for the eKheti application.
"""
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from ekheti.extensions import db, login_manager


class User(UserMixin, db.Model):
    """A farmer account. Every record in the app hangs off one of these."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    display_name = db.Column(db.String(100), nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    language = db.Column(db.String(8), default='en')
    location = db.Column(db.String(100))  # last location used for weather/advisory
    created_at = db.Column(db.DateTime, default=db.func.now())

    # Relationships
    conversations = db.relationship('Conversation', back_populates='user', lazy='dynamic',
                                    cascade='all, delete-orphan')
    crop_trackers = db.relationship('CropTracker', back_populates='user', lazy='dynamic',
                                    cascade='all, delete-orphan')
    reminders = db.relationship('Reminder', back_populates='user', lazy='dynamic',
                                cascade='all, delete-orphan')
    price_alerts = db.relationship('PriceAlert', back_populates='user', lazy='dynamic',
                                   cascade='all, delete-orphan')
    posts = db.relationship('Post', back_populates='author', lazy='dynamic')

    def set_password(self, password):
        """Set password hash."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check password hash."""
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'displayName': self.display_name,
            'language': self.language,
            'location': self.location,
        }


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


@login_manager.unauthorized_handler
def unauthorized():
    from flask import jsonify
    return jsonify({'error': 'Login required'}), 401
