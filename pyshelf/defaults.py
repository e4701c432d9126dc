"""
Default configuration values.
"""
from getpass import getuser

FORCE_READ_REQUESTS = True

# Which storage engine holds artifacts? Either "file" or "redis".
STORAGE_BACKEND = "file"

# Where does the "file" backend keep artifacts?
STORAGE_DIR = "/var/tmp/pyshelf-{}/storage".format(getuser())

# Where are per-request staging areas created? None means the system default.
TEMP_DIR = None

# Where do we find Redis?
REDIS_HOSTNAME = 'localhost'

# What prefix do artifact keys get in Redis?
REDIS_PREFIX = 'pyshelf.storage.'

# Logging configuration
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'debug': {
            'format': '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]',
            'datefmt': '%Y%m%d',
        },
        'default': {
            'format': '%(asctime)s - %(levelname)s - %(message)s',
            'datefmt': '%Y%m%d',
        },
    },

    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'DEBUG',
            'formatter': 'debug',
            'stream': 'ext://sys.stdout',
        },
        'app': {
            'class': 'logging.handlers.TimedRotatingFileHandler',
            'level': 'DEBUG',
            'formatter': 'default',
            'filename': '/var/log/pyshelf/pyshelf.log',
        },
    },

    'loggers': {
        '': {
            'handlers': ['console', 'app'],
            'level': 'INFO',
            'propagate': False,
        },
    }

}
