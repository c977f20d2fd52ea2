"""Gunicorn configuration for production deployment."""

import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Requests mostly wait on the backend, the checkout API and the chat webhook,
# so a few threaded workers go a long way.
workers = int(os.environ.get('WEB_CONCURRENCY', 2))
threads = int(os.environ.get('GUNICORN_THREADS', 4))
worker_class = 'gthread'

# The chat assistant can take a while to answer
timeout = int(os.environ.get('GUNICORN_TIMEOUT', 60))
graceful_timeout = 30
keepalive = 5

# Logs go to stdout/stderr for the container runtime
accesslog = '-'
errorlog = '-'
loglevel = os.environ.get('GUNICORN_LOG_LEVEL', 'info')
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)sus'

proc_name = 'noktos'

preload_app = True

max_requests = 1000
max_requests_jitter = 50

limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190
