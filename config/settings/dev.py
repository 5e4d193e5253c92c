"""Development settings for the Rambo marketplace project.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts and using
console email backend (OTP codes show up in the runserver output).
Do not use these settings in production!
"""

import structlog

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Use console email backend during development
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

# Human readable log lines instead of JSON
LOGGING["formatters"]["json"]["processor"] = structlog.dev.ConsoleRenderer()  # noqa: F405
LOGGING["loggers"]["apps"]["level"] = "DEBUG"  # noqa: F405
