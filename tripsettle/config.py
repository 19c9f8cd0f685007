"""
Default settings for the settlement service.

Any of these can be overridden with a ``TRIPSETTLE_`` prefixed environment
variable, e.g. ``TRIPSETTLE_CURRENCY_SYMBOL='$'``.
"""


class DefaultConfig:
    CURRENCY_SYMBOL = '¥'
    CORS_ORIGINS = '*'
    LOG_LEVEL = 'INFO'
    HOST = '127.0.0.1'
    PORT = 5000
    DEBUG = False


def logging_config(level):
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'verbose': {
                'format': '{levelname} {asctime} {module} {message}',
                'style': '{',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'verbose',
            },
        },
        'loggers': {
            'tripsettle': {
                'handlers': ['console'],
                'level': level,
                'propagate': False,
            },
        },
    }
