#!/usr/bin/env python3
"""
Gunicorn configuration for the Registration Intake service
"""

import os

# Server socket
bind = os.environ.get("GUNICORN_BIND", "127.0.0.1:8000")
backlog = 2048

# Worker processes. Several workers may share one audit log file; appends
# are serialized with a file lock.
workers = int(os.environ.get("GUNICORN_WORKERS", "2"))
worker_class = "sync"
timeout = 30
keepalive = 2

# Restart workers after this many requests
max_requests = 1000
max_requests_jitter = 50

# Logging
accesslog = os.environ.get("GUNICORN_ACCESS_LOG", "-")
errorlog = os.environ.get("GUNICORN_ERROR_LOG", "-")
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'

# Process naming
proc_name = "registration_intake"

daemon = False

preload_app = True

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190


def on_starting(server):
    server.log.info("Starting Registration Intake service")


def on_reload(server):
    server.log.info("Reloading Registration Intake service")


def when_ready(server):
    server.log.info("Registration Intake service is ready. Listening on: %s", server.address)


def on_exit(server):
    server.log.info("Shutting down Registration Intake service")
