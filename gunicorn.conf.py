"""Gunicorn config for the Xpense API (gunicorn xpense.main:app -c gunicorn.conf.py)."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# The ledger lives in process memory and is rewritten whole on every change,
# so exactly one worker may own it.
worker_class = "uvicorn.workers.UvicornWorker"
workers = 1

timeout = 60
graceful_timeout = 30
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("XPENSE_LOG_LEVEL", "info").lower()
