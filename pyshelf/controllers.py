"""
URL mappings for package index functionality.
"""
from flask import request

from pyshelf.model.metadata import ArchiveFormat


XML_MIME_TYPES = ("text/xml", "application/xml")


def create_routes(app):

    @app.route("/", defaults={"path": ""}, methods=["GET", "POST"])
    @app.route("/<path:path>", methods=["GET", "POST"])
    def dispatch(path):
        """
        Route by method and content.

        - POST with an XML body is a search
        - any other POST is an upload to the request path
        - GET of an archive is a download
        - any other GET is an index page
        """
        if request.method == "POST":
            if request.mimetype in XML_MIME_TYPES:
                app.logger.debug("Searching from: /{}".format(path))
                return app.search.handle(request)
            app.logger.debug("Uploading distribution to: /{}".format(path))
            return app.upload.handle(request)

        if ArchiveFormat.from_filename(path) is not None:
            return app.download.handle(request)
        return app.listing.handle(request)
