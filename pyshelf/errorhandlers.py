"""
Error handler registration.
"""
from requests import codes

from pyshelf.exceptions import BadRequestError, NotFoundError


def create_errorhandlers(app):

    @app.errorhandler(BadRequestError)
    def bad_request(error):
        return str(error), codes.bad_request

    @app.errorhandler(NotFoundError)
    def not_found(error):
        return str(error), codes.not_found
