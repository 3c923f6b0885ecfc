"""Development settings for the Bridal World API.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts, console email
and human-readable logs. Do not use these settings in production!
"""

import structlog

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Use console email backend during development
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

# Plain static storage: no manifest needed with runserver
STORAGES['staticfiles'] = {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'}  # noqa: F405

LOGGING['formatters']['json']['processor'] = structlog.dev.ConsoleRenderer(colors=False)  # noqa: F405
