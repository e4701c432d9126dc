"""
Configure the Flask application.
"""
from copy import deepcopy
from logging.config import dictConfig
from os.path import basename

from flask import request
from redis import Redis

from pyshelf import defaults
from pyshelf.controllers import create_routes
from pyshelf.errorhandlers import create_errorhandlers
from pyshelf.handlers.download import DownloadHandler
from pyshelf.handlers.listing import ListingHandler
from pyshelf.handlers.search import SearchHandler
from pyshelf.handlers.upload import UploadHandler
from pyshelf.storage.keyvalue import RedisStorage
from pyshelf.storage.local import FileStorage


def configure_app(app, debug=False, testing=False, settings=None):
    """
    Load configuration and initialize collaborators.
    """

    app.debug = debug
    app.testing = testing

    _configure_from_defaults(app)
    _configure_from_environment(app)
    if settings is not None:
        app.config.from_pyfile(settings)
    _configure_logging(app)
    _configure_jinja(app)

    app.redis = Redis(app.config['REDIS_HOSTNAME'])
    app.storage = _configure_storage(app)
    app.upload = UploadHandler(app)
    app.search = SearchHandler(app)
    app.listing = ListingHandler(app)
    app.download = DownloadHandler(app)

    if app.config.get('FORCE_READ_REQUESTS'):
        # read the request fully so that nginx and uwsgi play nice
        @app.after_request
        def read_request(response):
            request.stream.read()
            return response

    create_routes(app)
    create_errorhandlers(app)


def _configure_from_defaults(app):
    """
    Load configuration defaults from defaults.py in this package.
    """
    app.config.from_object(defaults)
    # logging setup edits this dictionary; keep the module default pristine
    app.config['LOGGING'] = deepcopy(defaults.LOGGING)


def _configure_from_environment(app):
    """
    Load configuration from a file specified as the value of
    the PYSHELF_SETTINGS environment variable.

    Don't complain if the variable is unset.
    """
    app.config.from_envvar("PYSHELF_SETTINGS", silent=True)


def _configure_logging(app):
    if app.debug or app.testing:
        app.config['LOGGING']['loggers']['']['handlers'] = ['console']
        if 'app' in app.config['LOGGING']['handlers']:
            del app.config['LOGGING']['handlers']['app']

    dictConfig(app.config['LOGGING'])


def _configure_jinja(app):
    def key_basename(key):
        return basename(key)

    app.jinja_env.filters.update({"basename": key_basename})


def _configure_storage(app):
    """
    Create the durable artifact store for the configured backend.
    """
    backend = app.config['STORAGE_BACKEND']
    if backend == "file":
        return FileStorage(app.config['STORAGE_DIR'], app.logger)
    if backend == "redis":
        return RedisStorage(app.redis, app.logger, app.config['REDIS_PREFIX'])
    raise ValueError("Unsupported storage backend: {}".format(backend))
