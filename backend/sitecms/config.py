import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "sql" keeps documents in the settings_documents table,
    # "file" keeps them in a single JSON file (local storage style)
    SETTINGS_BACKEND = os.getenv("SETTINGS_BACKEND", "sql")
    SETTINGS_FILE_PATH = os.getenv("SETTINGS_FILE_PATH", "instance/settings.json")
    SETTINGS_FILE_MAX_BYTES = int(os.getenv("SETTINGS_FILE_MAX_BYTES", 5 * 1024 * 1024))

    DELETE_CONFIRM_MAX_AGE = int(os.getenv("DELETE_CONFIRM_MAX_AGE", 300))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///sitecms-dev.db")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SETTINGS_BACKEND = "sql"
    LOG_LEVEL = "WARNING"
    LOG_FILE = None

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
