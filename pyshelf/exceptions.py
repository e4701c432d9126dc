"""
Shared exceptions.
"""


class PyshelfError(Exception):
    """
    Base class for failures that handlers translate into a status code.
    """
    pass


class MalformedUploadError(PyshelfError):
    pass


class MetadataError(PyshelfError):
    pass


class FilenameMismatchError(PyshelfError):
    pass


class InvalidQueryError(PyshelfError):
    pass


class StorageError(PyshelfError):
    pass


class NotFoundError(StorageError):

    def __init__(self, key=None):
        super(NotFoundError, self).__init__("Not found: {}".format(key))
        self.key = key


class BadRequestError(Exception):
    pass
