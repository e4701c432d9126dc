"""
Implements artifact storage in Redis.
"""
import re
from contextlib import contextmanager

from redis.exceptions import RedisError, ResponseError

from pyshelf.exceptions import NotFoundError, StorageError
from pyshelf.storage.storage import Storage


GLOB_CHARACTERS = re.compile(r"([\\*?\[\]])")


def escape_pattern(text):
    """
    Escape glob characters for use in a SCAN MATCH pattern.
    """
    return GLOB_CHARACTERS.sub(r"\\\1", text)


def decode(value):
    return value.decode("utf-8") if isinstance(value, bytes) else value


@contextmanager
def translated_errors(action, key):
    try:
        yield
    except RedisError as error:
        raise StorageError("Unable to {}: {}: {}".format(action, key, error))


class RedisStorage(Storage):
    """
    Key-value storage with one Redis string per artifact.

    Moves use RENAME, which Redis applies atomically.
    """

    def __init__(self, redis, logger, prefix="pyshelf.storage."):
        self.redis = redis
        self.logger = logger
        self.prefix = prefix

    def _key(self, key):
        return "{}{}".format(self.prefix, key)

    def exists(self, key):
        with translated_errors("check", key):
            return bool(self.redis.exists(self._key(key)))

    def value(self, key):
        with translated_errors("read", key):
            data = self.redis.get(self._key(key))
        if data is None:
            self.logger.debug("No value exists for: {}".format(key))
            raise NotFoundError(key)
        return data

    def save(self, key, data):
        with translated_errors("write", key):
            self.redis.set(self._key(key), data)
        self.logger.debug("Wrote value for: {}".format(key))

    def list(self, prefix):
        patterns = [self._key(escape_pattern(prefix) + "/*")] if prefix else [self._key("*")]
        if prefix:
            patterns.append(self._key(escape_pattern(prefix)))

        keys = set()
        with translated_errors("list", prefix):
            for pattern in patterns:
                for name in self.redis.scan_iter(match=pattern):
                    keys.add(decode(name)[len(self.prefix):])

        self.logger.debug("Listed: {} keys under: {}".format(len(keys), prefix))
        return sorted(keys)

    def move(self, source, destination):
        try:
            self.redis.rename(self._key(source), self._key(destination))
        except ResponseError:
            # RENAME fails when the source key does not exist
            if not self.exists(source):
                raise NotFoundError(source)
            raise StorageError("Unable to move: {} to: {}".format(source, destination))
        except RedisError as error:
            raise StorageError("Unable to move: {} to: {}: {}".format(source, destination, error))
        self.logger.debug("Moved value for: {} to: {}".format(source, destination))

    def delete(self, key):
        with translated_errors("delete", key):
            removed = self.redis.delete(self._key(key))
        self.logger.debug("Removed: {} values for: {}".format(removed, key))
        return removed > 0
