"""
Private per-request temporary storage.
"""
from shutil import rmtree
from tempfile import mkdtemp
from uuid import uuid4

from pyshelf.storage.local import FileStorage


class StagingArea(object):
    """
    A temporary directory exclusive to one request.

    Objects are written here before they are copied into the durable
    store; the directory is removed when the context exits.
    """

    def __init__(self, temp_dir, logger, prefix="pyshelf-"):
        self.logger = logger
        self.base_dir = mkdtemp(prefix=prefix, dir=temp_dir)
        self.storage = FileStorage(self.base_dir, logger)
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def new_key(self):
        return uuid4().hex

    def path(self, key):
        return self.storage.compute_path(key)

    def close(self):
        """
        Remove the staging directory, logging but not raising on failure.
        """
        if self.closed:
            return
        self.closed = True
        try:
            rmtree(self.base_dir)
            self.logger.debug("Removed staging area: {}".format(self.base_dir))
        except OSError as error:
            self.logger.warning("Unable to remove staging area: {}: {}".format(self.base_dir, error))
