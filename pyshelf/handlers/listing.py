"""
Implements the "simple" repository index pages.
"""
from flask import jsonify, make_response, render_template
from requests import codes

from pyshelf.handlers.handler import Handler
from pyshelf.model.names import normalize
from pyshelf.storage import make_key


def wants_json(request):
    """
    Should response use JSON?
    """
    for mime_type, _ in request.accept_mimetypes:
        # If we see a mime type that means HTML before JSON, return False
        if mime_type.startswith("text/html"):
            return False
        elif mime_type.startswith("application/xhtml"):
            return False
        # If we see JSON explicitly, return True
        elif mime_type.startswith("application/json"):
            return True
    # Default to False (HTML)
    return False


class ListingHandler(Handler):
    """
    List stored artifacts under a normalized path.
    """

    def handle(self, request):
        normalized = normalize(request.path)
        if normalized != request.path:
            self.logger.debug("Redirecting: {} to: {}".format(request.path, normalized))
            response = make_response("", codes.moved_permanently)
            response.headers["Location"] = normalized
            return response

        prefix = make_key(request.path)
        self.logger.info("Showing index for: {}".format(prefix or "/"))
        keys = self.storage.list(prefix)

        if wants_json(request):
            return jsonify(prefix=prefix, keys=keys)
        return render_template("simple.html", prefix=prefix, keys=keys)
