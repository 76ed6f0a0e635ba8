from .base import *

DEBUG = True
ALLOWED_HOSTS = ['*']
CORS_ALLOW_ALL_ORIGINS = True
LOGGING['root']['level'] = 'DEBUG'
REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []
