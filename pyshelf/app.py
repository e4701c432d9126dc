"""
Factory entry point for the Flask application.
"""
from flask import Flask

from pyshelf.configure import configure_app


def create_app(debug=False, testing=False, settings=None):
    """
    Create and configure the application.

    :param settings: optional path to a settings file; takes precedence
                     over the PYSHELF_SETTINGS environment variable
    """
    app = Flask(__name__.split('.')[0])
    configure_app(app, debug=debug, testing=testing, settings=settings)
    return app
