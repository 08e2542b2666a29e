"""
eKheti - Farming Advisory Platform

This module initializes the Flask application and registers blueprints.
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask, current_app, jsonify, request, session
from flask_login import current_user
from werkzeug.exceptions import HTTPException

from config import Config
from ekheti.errors import EkhetiError


def get_locale():
    """Pick the reply language: ?lang=, then the saved choice, then the browser."""
    languages = current_app.config['LANGUAGES']
    lang = request.args.get('lang')
    if lang in languages:
        return lang
    if session.get('lang') in languages:
        return session['lang']
    if current_user.is_authenticated and current_user.language in languages:
        return current_user.language
    return request.accept_languages.best_match(languages)


def create_app(config_class=Config):
    """Application factory function to create and configure the Flask app."""
    if hasattr(config_class, 'validate'):
        config_class.validate()

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    from ekheti.extensions import db, migrate, cache, babel, login_manager
    db.init_app(app)
    migrate.init_app(app, db)
    cache.init_app(app)
    babel.init_app(app, locale_selector=get_locale)
    login_manager.init_app(app)

    # Register blueprints
    from ekheti.auth import bp as auth_bp
    from ekheti.main import bp as main_bp
    from ekheti.advisory import bp as advisory_bp
    from ekheti.chat import bp as chat_bp
    from ekheti.tracker import bp as tracker_bp
    from ekheti.notifications import bp as notifications_bp
    from ekheti.community import bp as community_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(main_bp)
    app.register_blueprint(advisory_bp, url_prefix='/api')
    app.register_blueprint(chat_bp, url_prefix='/api/chat')
    app.register_blueprint(tracker_bp, url_prefix='/api/expense-tracker')
    app.register_blueprint(notifications_bp, url_prefix='/api/notifications')
    app.register_blueprint(community_bp, url_prefix='/api/community')

    register_error_handlers(app)
    configure_logging(app)

    # Create database tables
    with app.app_context():
        from ekheti import models  # noqa: F401
        db.create_all()

    return app


def register_error_handlers(app):
    @app.errorhandler(EkhetiError)
    def handle_ekheti_error(error):
        app.logger.warning('%s: %s', type(error).__name__, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code


def configure_logging(app):
    """Attach a log handler based on LOG_TO_STDOUT / LOG_LEVEL."""
    if app.debug or app.testing:
        return

    level = getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO)
    if app.config['LOG_TO_STDOUT']:
        handler = logging.StreamHandler()
    else:
        os.makedirs('logs', exist_ok=True)
        handler = RotatingFileHandler('logs/ekheti.log', maxBytes=1024 * 1024, backupCount=10)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s %(name)s: %(message)s [in %(pathname)s:%(lineno)d]'))
    handler.setLevel(level)

    # app.logger is the "ekheti" logger, so ekheti.services.* and ekheti.ai.* propagate here
    app.logger.addHandler(handler)
    app.logger.setLevel(level)
    app.logger.info('eKheti startup')
