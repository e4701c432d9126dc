"""
WSGI hook for uwsgi, gunicorn and friends.

Settings come from the file named by PYSHELF_SETTINGS.
"""
from pyshelf.app import create_app


application = create_app()
