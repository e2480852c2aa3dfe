"""
Project: Restaurant Management API
Description:
Application configuration. Values come from the environment (a local .env
file is loaded first). SECRET_KEY has no default; the app factory refuses to
start without it.
"""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///restaurant.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    TOKEN_MAX_AGE = int(os.getenv("TOKEN_MAX_AGE", 60 * 60))  # 1 hour
    TOKEN_COOKIE_NAME = os.getenv("TOKEN_COOKIE_NAME", "token")
    TOKEN_COOKIE_SECURE = os.getenv("TOKEN_COOKIE_SECURE", "false").lower() in ("1", "true", "yes")  # set true behind HTTPS

    SOCKETIO_ASYNC_MODE = os.getenv("SOCKETIO_ASYNC_MODE", "threading")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    MENU_PAGE_LIMIT = 50
    MENU_PAGE_MAX = 200

    ADMIN_NAME = os.getenv("ADMIN_NAME", "Restaurant Admin")
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com").strip().lower()
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
