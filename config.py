import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

CHAIN_HOME = Path(os.getenv("CHAIN_HOME", Path.home() / ".chain")).expanduser()


class Config:
    CHAIN_HOME = CHAIN_HOME
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{CHAIN_HOME / 'chain.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    GRID_WINDOW_DAYS = int(os.getenv("GRID_WINDOW_DAYS", 10))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    GRID_WINDOW_DAYS = 10
    LOG_LEVEL = "DEBUG"
