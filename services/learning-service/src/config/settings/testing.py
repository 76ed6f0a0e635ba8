"""
Testing Settings

Settings for running tests.
"""

from .base import *

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []

MEDIA_PUBLIC_BASE_URL = 'http://media.test'
AWS_STORAGE_BUCKET_NAME = 'learning-test'
