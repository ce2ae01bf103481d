# config/settings/local.py
from .base import *  # noqa

DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"

DATABASES = {"default": postgres_database()}

LOGGING["loggers"]["ipc_core"]["level"] = os.getenv("DJANGO_LOG_LEVEL", "DEBUG")
