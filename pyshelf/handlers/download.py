"""
Implements distribution download.
"""
from flask import make_response
from magic import from_buffer

from pyshelf.handlers.handler import Handler
from pyshelf.storage import make_key


class DownloadHandler(Handler):
    """
    Serve stored distribution bytes.
    """

    def handle(self, request):
        key = make_key(request.path)
        self.logger.info("Getting distribution: {}".format(key))

        # raises NotFoundError for unknown keys
        content_data = self.storage.value(key)
        content_type = from_buffer(content_data, mime=True)
        self.logger.debug("Computed content type: {} for: {}".format(content_type, key))

        # don't log binary distribution content (.tar.gz, .zip, etc.), even at debug
        response = make_response(content_data)
        response.headers["Content-Type"] = content_type
        return response
