"""Test settings for the Rambo marketplace project.

Uses an in-memory SQLite database, the locmem email backend (so tests can
inspect ``django.core.mail.outbox``) and runs Celery tasks eagerly.
"""

import tempfile

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = 'test-secret-key-with-enough-length-for-hs256-signing'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

MEDIA_ROOT = tempfile.mkdtemp(prefix='rambo-test-media-')

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

LOGGING["handlers"]["console"]["level"] = "WARNING"  # noqa: F405
