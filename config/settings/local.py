from .base import *  # noqa: F403
from .base import env

# GENERAL
# ------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#debug
DEBUG = True
# https://docs.djangoproject.com/en/dev/ref/settings/#secret-key
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="tl0wS9WcbV2kKk4DLMb3u4GEZVqvGgbA8lhYjVb3YhXo8ypiU8m47Ak3H7AOwyGN",
)
# https://docs.djangoproject.com/en/dev/ref/settings/#allowed-hosts
ALLOWED_HOSTS = ["localhost", "0.0.0.0", "127.0.0.1"]  # noqa: S104

# CACHES
# ------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#caches
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "",
    },
}

# drf-spectacular
# ------------------------------------------------------------------------------
SPECTACULAR_SETTINGS["SERVE_INCLUDE_SCHEMA"] = True  # noqa: F405
# Your stuff...
# ------------------------------------------------------------------------------
