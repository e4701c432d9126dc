"""
Abstraction around an endpoint handler.
"""
from abc import ABCMeta, abstractmethod


class Handler(metaclass=ABCMeta):
    """
    Abstract interface for serving one kind of index request.
    """

    def __init__(self, app):
        self.storage = app.storage
        self.logger = app.logger
        self.temp_dir = app.config["TEMP_DIR"]

    @abstractmethod
    def handle(self, request):
        """
        Serve a request.

        :param request: the current `flask.Request`
        :returns: a `flask.Response`
        """
        pass
