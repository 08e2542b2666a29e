import os
from dotenv import load_dotenv

# Load environment variables from .env file
basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, '.env'))

class Config:
    """Base configuration with default settings."""
    # Security
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-please-change-in-production'

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'ekheti.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Gemini
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')
    GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-1.5-flash')
    GEMINI_EMBEDDING_MODEL = os.environ.get('GEMINI_EMBEDDING_MODEL', 'models/text-embedding-004')

    # External APIs
    OPENWEATHERMAP_API_KEY = os.environ.get('OPENWEATHERMAP_API_KEY')
    NEWSDATA_API_KEY = os.environ.get('NEWSDATA_API_KEY')
    # Public sample key published by data.gov.in
    DATA_GOV_API_KEY = os.environ.get('DATA_GOV_API_KEY', '579b464db66ec23bdd000001cdd3946e44ce4aad7209ff7b23ac571b')
    HTTP_TIMEOUT = int(os.environ.get('HTTP_TIMEOUT', '30'))

    # File uploads
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max request size
    MAX_IMAGE_SIZE = 4 * 1024 * 1024
    MAX_DOCUMENT_SIZE = 10 * 1024 * 1024
    ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

    # Chat
    CHAT_HISTORY_WINDOW = 10

    # Caching
    CACHE_TYPE = os.environ.get('CACHE_TYPE', 'SimpleCache')  # Can be 'RedisCache' etc. in production
    CACHE_DEFAULT_TIMEOUT = 300
    MARKET_CACHE_TIMEOUT = 900

    # Localization
    BABEL_DEFAULT_LOCALE = 'en'
    LANGUAGES = ['en', 'hi', 'gu', 'mr', 'bn', 'ta', 'te', 'kn', 'pa']

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_TO_STDOUT = os.environ.get('LOG_TO_STDOUT')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_ECHO = False
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    WTF_CSRF_ENABLED = False
    CACHE_TYPE = 'NullCache'
    GEMINI_API_KEY = 'test-gemini-key'
    OPENWEATHERMAP_API_KEY = 'test-weather-key'
    NEWSDATA_API_KEY = 'test-news-key'
    DATA_GOV_API_KEY = 'test-data-gov-key'


class ProductionConfig(Config):
    """Production configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY')

    # Ensure secure settings in production
    SESSION_COOKIE_SECURE = True
    REMEMBER_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_HTTPONLY = True

    @classmethod
    def validate(cls):
        if not cls.SECRET_KEY:
            raise ValueError("No SECRET_KEY set for production")


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
