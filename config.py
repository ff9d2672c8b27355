import os
from sqlalchemy.pool import QueuePool
from urllib.parse import urlparse
from dotenv import load_dotenv
import pymysql
pymysql.install_as_MySQLdb()

load_dotenv()


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'change_this_secret_key')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": QueuePool,
        "pool_size": 5,
        "max_overflow": 2,
        "pool_timeout": 10
    }

    # Bearer tokens
    JWT_SECRET_KEY = os.getenv('JWT_SECRET', SECRET_KEY)
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRATION_HOURS = int(os.getenv('JWT_EXPIRATION_HOURS', 1))

    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    DEFAULT_PAGE_LIMIT = 20
    LESSON_PAGE_LIMIT = 50
    MAX_PAGE_LIMIT = 100

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevConfig(Config):
    """Development Configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    SQLALCHEMY_DATABASE_URI = os.getenv('SQLALCHEMY_DATABASE_URI', 'mysql+pymysql://root:@localhost/lms_db')


class TestConfig(Config):
    DEBUG = False
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET_KEY = 'test-jwt-secret-key-with-enough-length'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    LOG_LEVEL = "WARNING"


class ProdConfig(Config):
    """Production Configuration (Heroku deployment)"""
    DEBUG = False

    raw_db_url = os.getenv('DATABASE_URL')

    if raw_db_url:
        if raw_db_url.startswith("mysql://"):
            raw_db_url = raw_db_url.replace("mysql://", "mysql+pymysql://", 1)

        parsed_url = urlparse(raw_db_url)
        SQLALCHEMY_DATABASE_URI = f"{parsed_url.scheme}://{parsed_url.netloc}{parsed_url.path}"
    else:
        SQLALCHEMY_DATABASE_URI = os.getenv('JAWSDB_URL', 'sqlite://')
        if SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
            SQLALCHEMY_ENGINE_OPTIONS = {}


ENV = os.getenv('FLASK_ENV', 'production').lower()

config_dict = {
    "development": DevConfig,
    "testing": TestConfig,
    "production": ProdConfig
}

CurrentConfig = config_dict.get(ENV, ProdConfig)
