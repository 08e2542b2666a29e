"""
Database models for the eKheti application.
"""
from ekheti.models.user import User
from ekheti.models.chat import Conversation, Message
from ekheti.models.tracker import CropTracker, Transaction
from ekheti.models.notifications import Reminder, PriceAlert, WeatherAlertSettings
from ekheti.models.community import Post, Comment
from ekheti.models.advisory import SavedAdvisory

# Make all models available at package level
__all__ = ['User', 'Conversation', 'Message', 'CropTracker', 'Transaction', 'Reminder',
           'PriceAlert', 'WeatherAlertSettings', 'Post', 'Comment', 'SavedAdvisory']
