"""
Implements artifact storage on the local file system.
"""
from os import makedirs, remove, replace, walk
from os.path import dirname, isfile, join, relpath

from pyshelf.exceptions import NotFoundError, StorageError
from pyshelf.storage.storage import Storage, is_below


class FileStorage(Storage):
    """
    File system storage mapping each key segment to a directory.
    """

    def __init__(self, base_dir, logger):
        """
        Initialize storage.

        :param base_dir: root directory for storage
        """
        self.logger = logger
        self.base_dir = base_dir
        makedirs(self.base_dir, exist_ok=True)

    def exists(self, key):
        return isfile(self.compute_path(key))

    def value(self, key):
        try:
            with open(self.compute_path(key), "rb") as file_:
                return file_.read()
        except FileNotFoundError:
            self.logger.debug("No file exists for: {}".format(key))
            raise NotFoundError(key)
        except OSError as error:
            raise StorageError("Unable to read: {}: {}".format(key, error))

    def save(self, key, data):
        path = self.compute_path(key)
        try:
            makedirs(dirname(path), exist_ok=True)
            with open(path, "wb") as file_:
                file_.write(data)
        except OSError as error:
            raise StorageError("Unable to write: {}: {}".format(key, error))
        self.logger.debug("Wrote file for: {}".format(key))

    def list(self, prefix):
        keys = [prefix] if prefix and self.exists(prefix) else []
        for dirpath, _, filenames in walk(self.compute_path(prefix)):
            for filename in filenames:
                key = relpath(join(dirpath, filename), self.base_dir).replace("\\", "/")
                if is_below(key, prefix):
                    keys.append(key)
        self.logger.debug("Listed: {} keys under: {}".format(len(keys), prefix))
        return sorted(keys)

    def move(self, source, destination):
        source_path = self.compute_path(source)
        destination_path = self.compute_path(destination)
        if not isfile(source_path):
            raise NotFoundError(source)
        try:
            makedirs(dirname(destination_path), exist_ok=True)
            replace(source_path, destination_path)
        except OSError as error:
            raise StorageError("Unable to move: {} to: {}: {}".format(source, destination, error))
        self.logger.debug("Moved file for: {} to: {}".format(source, destination))

    def delete(self, key):
        try:
            remove(self.compute_path(key))
            self.logger.debug("Removed file for: {}".format(key))
            return True
        except OSError:
            self.logger.debug("Unable to remove file for: {}".format(key))
            return False

    def compute_path(self, key):
        """
        Compute file system path.
        """
        return join(self.base_dir, *[segment for segment in key.split("/") if segment])
