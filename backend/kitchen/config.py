# backend/kitchen/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/kitchen.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///kitchen.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Load the demo dataset (units, users, recipes, ...) on first start
    SEED_DEMO_DATA = os.environ.get("KITCHEN_SEED_DEMO", "false").lower() == "true"

    # Batches with less than this many hours left are flagged as near expiry
    NEAR_EXPIRY_HOURS = int(os.environ.get("KITCHEN_NEAR_EXPIRY_HOURS", "24"))
