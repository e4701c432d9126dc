"""
Implements the legacy XML-RPC search used by "pip search".
"""
from xml.parsers.expat import ExpatError
from xmlrpc.client import Error as XmlRpcError
from xmlrpc.client import dumps, loads

import defusedxml.xmlrpc
from flask import make_response
from requests import codes

from pyshelf.exceptions import InvalidQueryError, PyshelfError
from pyshelf.handlers.handler import Handler
from pyshelf.handlers.staging import StagingArea
from pyshelf.model.metadata import read_package_info
from pyshelf.model.names import normalize
from pyshelf.storage import copy

defusedxml.xmlrpc.monkey_patch()


def parse_search_terms(body):
    """
    Extract the project name terms from a search method call.

    The call's parameters are examined in order; the first struct with a
    "name" member holding at least one non-blank string supplies the terms.
    Other members (e.g. "summary") are ignored.

    :param body: the raw request body
    :returns: a non-empty list of strings
    :raises: InvalidQueryError if the body is not a method call with a name
    """
    try:
        params, method = loads(body)
    except (ExpatError, XmlRpcError, TypeError, ValueError) as error:
        raise InvalidQueryError("Invalid xml: {}".format(error))

    if method is None:
        raise InvalidQueryError("Invalid xml, not a method call")

    for param in params:
        if not isinstance(param, dict) or "name" not in param:
            continue
        values = param["name"]
        if not isinstance(values, list):
            values = [values]
        terms = [value for value in values if isinstance(value, str) and value.strip()]
        if terms:
            return terms

    raise InvalidQueryError("Invalid xml, project name not found")


# the fixed empty search response, without an XML declaration
EMPTY_RESULT = "\n".join(["<methodResponse>",
                          "<params>",
                          "<param>",
                          "<value><array><data>",
                          "</data></array></value>",
                          "</param>",
                          "</params>",
                          "</methodResponse>"])


def empty_result():
    return EMPTY_RESULT


def found_result(info):
    return dumps(([{"name": info.name,
                    "summary": info.summary,
                    "version": info.version,
                    "_pypi_ordering": False}],),
                 methodresponse=True)


class SearchHandler(Handler):
    """
    Answer a search with the metadata of the newest matching artifact.
    """

    def handle(self, request):
        try:
            with StagingArea(self.temp_dir, self.logger, prefix="pyshelf-search-") as staging:
                content = self.search(request.get_data(), staging)
        except PyshelfError as error:
            self.logger.warning("Search failed: {}".format(error))
            return make_response("", codes.internal_server_error)

        response = make_response(content)
        response.headers["Content-Type"] = "text/xml"
        return response

    def search(self, body, staging):
        """
        Resolve a search body against storage.

        Only the first name term is used for the lookup.

        :returns: the serialized method response
        """
        term = parse_search_terms(body)[0]
        prefix = normalize(term)
        self.logger.info("Searching for: {} under: {}".format(term, prefix))

        keys = self.storage.list(prefix)
        if not keys:
            self.logger.debug("No artifacts found under: {}".format(prefix))
            return empty_result()

        # newest means lexicographically greatest, not most recently uploaded
        latest = max(keys)
        self.logger.debug("Reading metadata from: {}".format(latest))
        copy(self.storage, staging.storage, [latest])
        info = read_package_info(staging.path(latest))
        return found_result(info)
