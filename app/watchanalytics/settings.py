"""
Django settings for watchanalytics project.

Values that differ between deployments are read from the environment.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


def _env_tokens(name: str) -> dict[str, str]:
    """Parse ``user:token,user:token`` pairs."""
    tokens: dict[str, str] = {}
    for pair in os.environ.get(name, "").split(","):
        username, _, token = pair.partition(":")
        if username.strip() and token.strip():
            tokens[username.strip()] = token.strip()
    return tokens


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-watchanalytics-dev-key")

DEBUG = _env_bool("DJANGO_DEBUG", default=True)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "django.contrib.humanize",
    "pending_reviews",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.locale.LocaleMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "watchanalytics.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "watchanalytics.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

LOGIN_URL = "admin:login"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "pending_reviews": {
            "handlers": ["console"],
            "level": os.environ.get("PENDING_REVIEWS_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "pywikibot": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    },
}

# Wiki whose watchlists are inspected.
PENDING_REVIEWS_WIKI_CODE = os.environ.get("PENDING_REVIEWS_WIKI_CODE", "test")
PENDING_REVIEWS_WIKI_FAMILY = os.environ.get("PENDING_REVIEWS_WIKI_FAMILY", "wikipedia")
PENDING_REVIEWS_WIKI_URL = os.environ.get("PENDING_REVIEWS_WIKI_URL", "https://test.wikipedia.org")
PENDING_REVIEWS_SCRIPT_PATH = os.environ.get("PENDING_REVIEWS_SCRIPT_PATH", "/w")

# Account pywikibot is logged in as. Its own watchlist is read directly,
# other users need a watchlist token.
PENDING_REVIEWS_WIKI_USERNAME = os.environ.get("PENDING_REVIEWS_WIKI_USERNAME", "")
PENDING_REVIEWS_WATCHLIST_TOKENS = _env_tokens("PENDING_REVIEWS_WATCHLIST_TOKENS")

PENDING_REVIEWS_DEFAULT_LIMIT = _env_int("PENDING_REVIEWS_DEFAULT_LIMIT", 20)
PENDING_REVIEWS_MAX_LIMIT = _env_int("PENDING_REVIEWS_MAX_LIMIT", 500)
