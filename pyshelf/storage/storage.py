"""
Abstraction around artifact storage.
"""
from abc import ABCMeta, abstractmethod

from pyshelf.exceptions import BadRequestError


def make_key(*parts):
    """
    Join key parts into a single "/"-separated storage key.

    Empty parts and surrounding slashes are dropped, so a request path
    of "/" contributes nothing.

    :raises: BadRequestError if a part contains a relative path segment
    """
    segments = []
    for part in parts:
        for segment in part.split("/"):
            if not segment:
                continue
            if segment in (".", ".."):
                raise BadRequestError("Invalid key segment: {}".format(segment))
            segments.append(segment)
    return "/".join(segments)


def is_below(key, prefix):
    """
    Is key listed under prefix?
    """
    return not prefix or key == prefix or key.startswith(prefix + "/")


class Storage(metaclass=ABCMeta):
    """
    Abstract interface for storing artifact bytes under string keys.
    """

    @abstractmethod
    def save(self, key, data):
        """
        Save data under a key, replacing any previous value.

        :param key: the storage key
        :param data: the bytes to store
        """
        pass

    @abstractmethod
    def value(self, key):
        """
        Get the data stored under a key.

        :param key: the storage key
        :returns: the stored bytes
        :raises: NotFoundError if nothing is stored under the key
        """
        pass

    @abstractmethod
    def exists(self, key):
        """
        Is anything stored under a key?
        """
        pass

    @abstractmethod
    def list(self, prefix):
        """
        List keys stored under a prefix.

        :param prefix: a key prefix; the empty prefix lists everything
        :returns: a sorted list of keys
        """
        pass

    @abstractmethod
    def move(self, source, destination):
        """
        Atomically move data from one key to another.

        :raises: NotFoundError if nothing is stored under the source key
        """
        pass

    @abstractmethod
    def delete(self, key):
        """
        Remove a key.

        :returns: whether the key existed
        """
        pass


def copy(source, target, keys):
    """
    Copy keys from one storage to another.

    :returns: the target storage
    """
    for key in keys:
        target.save(key, source.value(key))
    return target
