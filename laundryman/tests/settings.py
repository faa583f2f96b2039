"""
Django settings for Laundryman tests.

Includes all apps needed to run the full Laundryman test suite.
"""

SECRET_KEY = "test-secret-key-for-laundryman-tests"

DEBUG = True

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.admin",
    "laundryman",
    "laundryman.contrib.rewards",
]

MIDDLEWARE = [
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

ROOT_URLCONF = "laundryman.tests.urls"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = "Africa/Douala"

# Payment calls are mocked in tests; credentials only need to be present
LAUNDRYMAN = {
    "CAMPAY_BASE_URL": "https://campay.test/api",
    "CAMPAY_USERNAME": "laundry",
    "CAMPAY_PASSWORD": "secret",
    "CAMPAY_APP_ID": "app-123",
    "PAYMENT_TIMEOUT": 5.0,
}
