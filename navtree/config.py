"""Application configuration"""
import os


class Config:
    """Base configuration class"""

    # Flask configuration
    SECRET_KEY = os.environ.get('SECRET_KEY', 'your-secret-key-change-in-production')

    # Database configuration
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///navtree.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Page catalog - empty URL means the local pages table is used
    PAGE_CATALOG_URL = os.environ.get('PAGE_CATALOG_URL', '')
    PAGE_CATALOG_API_KEY = os.environ.get('PAGE_CATALOG_API_KEY', '')
    PAGE_CATALOG_TIMEOUT = int(os.environ.get('PAGE_CATALOG_TIMEOUT', 5))

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Rate limiting
    RATELIMIT_STORAGE_URI = 'memory://'
    RATELIMIT_HEADERS_ENABLED = True

    # Create a default admin user on first start
    CREATE_DEFAULT_ADMIN = True


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    """Testing configuration - in-memory database, no rate limits"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    PAGE_CATALOG_URL = ''
    RATELIMIT_ENABLED = False
    CREATE_DEFAULT_ADMIN = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    # Override secret key requirement
    def __init__(self):
        if self.SECRET_KEY == 'your-secret-key-change-in-production':
            raise ValueError("Must set SECRET_KEY environment variable in production!")


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
