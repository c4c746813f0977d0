"""Development settings for the Warebnb storage service.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts and rendering
logs for humans. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Readable key/value log lines instead of JSON
LOGGING["handlers"]["console"]["formatter"] = "console"  # noqa: F405
LOGGING["loggers"]["apps"]["level"] = "DEBUG"  # noqa: F405
