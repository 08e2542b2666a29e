"""
Flask extensions for the eKheti application.
"""
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_caching import Cache
from flask_babel import Babel
from flask_login import LoginManager

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
cache = Cache()
babel = Babel()
login_manager = LoginManager()

# This will be imported by ekheti/__init__.py
