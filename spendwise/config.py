import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


def engine_options(uri, timeout):
    """Bound the wait for a store connection to ``timeout`` seconds."""
    if uri.startswith("sqlite"):
        return {"connect_args": {"timeout": timeout}}
    return {"pool_pre_ping": True, "connect_args": {"connect_timeout": timeout}}


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'spendwise.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STORE_CONNECT_TIMEOUT = int(os.getenv("STORE_CONNECT_TIMEOUT", "5"))
    SQLALCHEMY_ENGINE_OPTIONS = engine_options(SQLALCHEMY_DATABASE_URI, STORE_CONNECT_TIMEOUT)
    # Used by analytics when no GlobalBudget is stored for the period
    DEFAULT_GLOBAL_BUDGET = float(os.getenv("DEFAULT_GLOBAL_BUDGET", "12000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
