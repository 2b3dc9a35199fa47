"""
Runtime configuration.

Everything comes from the environment (optionally a .env file loaded by
main.py before this module is imported). Defaults match a local run:

  DB_PATH=./data/contributions.db
  STATIC_DIR=./static
  HOST=0.0.0.0
  PORT=8080
  LOG_LEVEL=INFO
"""

import os

DB_PATH = os.environ.get("DB_PATH", "./data/contributions.db")
STATIC_DIR = os.environ.get("STATIC_DIR", "./static")

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8080"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Streak scans never look further back than this many distinct active days
STREAK_LOOKBACK_DAYS = 365
