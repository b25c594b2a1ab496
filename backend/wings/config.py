# backend/wings/config.py
from __future__ import annotations
import os


class Config:
    # JSON document holding products, customers and transactions.
    # Relative paths resolve against the Flask instance folder.
    DATA_FILE = os.environ.get("WINGS_DATA_FILE", "db.json")

    # Optional write-through mirror (any SQLAlchemy URL), e.g. sqlite:///mirror.sqlite3
    MIRROR_URL = os.environ.get("WINGS_MIRROR_URL") or None

    LOG_LEVEL = os.environ.get("WINGS_LOG_LEVEL", "INFO")

    CURRENCY_SYMBOL = os.environ.get("WINGS_CURRENCY_SYMBOL", "R")

    CORS_ALLOWED_ORIGINS = {
        origin.strip()
        for origin in os.environ.get(
            "WINGS_CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000",
        ).split(",")
        if origin.strip()
    }

    # Report defaults
    SALES_REPORT_DAYS = 30
    DAILY_SALES_DAYS = 7
    STOCK_MOVEMENT_DAYS = 30
    TOP_PRODUCTS_LIMIT = 10
    TOP_CUSTOMERS_LIMIT = 5
