#!/usr/bin/env python

"""
    Configurations for Stacks

    :copyright: (c) 2015 by AUTHORS
    :license: see LICENSE for more details
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Determine environment
TESTING = os.getenv("TESTING", "false").lower() == "true"

# API server configuration
SCHEME = 'http'
HOST = os.environ.get('STACKS_HOST', 'localhost')
PORT = int(os.environ.get('STACKS_PORT', 5000))
WORKERS = int(os.environ.get('STACKS_WORKERS', 1))
DEBUG = bool(int(os.environ.get('STACKS_DEBUG', 0)))
LOG_LEVEL = os.environ.get('STACKS_LOG_LEVEL', 'info')
SSL_CRT = os.environ.get('STACKS_SSL_CRT')
SSL_KEY = os.environ.get('STACKS_SSL_KEY')

# Shared secret every request must present in the x-api-key header
API_KEY = os.environ.get('API_KEY')

# Requests allowed per client within the window (seconds)
RATE_LIMIT_MAX = int(os.environ.get('RATE_LIMIT_MAX', 4000))
RATE_LIMIT_WINDOW = int(os.environ.get('RATE_LIMIT_WINDOW', 90 * 120 * 2))

CORS_ORIGINS = [
    origin.strip() for origin in os.environ.get('CORS_ORIGINS', '*').split(',')
    if origin.strip()
]

OPTIONS = {
    'host': HOST,
    'port': PORT,
    'log_level': LOG_LEVEL,
    'reload': DEBUG,
    'workers': WORKERS,
}
if SSL_CRT and SSL_KEY:
    OPTIONS['ssl_keyfile'] = SSL_KEY
    OPTIONS['ssl_certfile'] = SSL_CRT
    SCHEME = 'https'

DB_CONFIG = {
    'user': os.environ.get('DB_USER', 'libadmin'),
    'password': os.environ.get('DB_PASSWORD'),
    'host': os.environ.get('DB_HOST', 'localhost'),
    'port': int(os.environ.get('DB_PORT', '5432')),
    'dbname': os.environ.get('DB_NAME', 'library'),
}

# Database configuration
DB_URI = os.environ.get('DB_URI') or (
    "sqlite:///:memory:" if TESTING else
    'postgresql+psycopg2://{user}:{password}@{host}:{port}/{dbname}'.format(**DB_CONFIG)
)

__all__ = [
    'SCHEME', 'HOST', 'PORT', 'DEBUG', 'LOG_LEVEL', 'OPTIONS', 'API_KEY',
    'RATE_LIMIT_MAX', 'RATE_LIMIT_WINDOW', 'CORS_ORIGINS',
    'DB_URI', 'DB_CONFIG', 'TESTING',
]
