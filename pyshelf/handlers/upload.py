"""
Implements distribution upload.

Uploads pass through a short linear sequence of stages:

    RECEIVING -> STAGED -> COPIED -> VALIDATING -> FINALIZED | REJECTED -> CLEANED_UP

The uploaded bytes are written to a private staging area, copied into
the durable store under a random scratch key, and only moved to their
canonical key once the archive metadata agrees with the filename.
"""
from enum import Enum

from flask import make_response
from requests import codes

from pyshelf.exceptions import (BadRequestError,
                                FilenameMismatchError,
                                MalformedUploadError,
                                MetadataError,
                                PyshelfError,
                                StorageError)
from pyshelf.handlers.handler import Handler
from pyshelf.handlers.staging import StagingArea
from pyshelf.model.filenames import is_valid_filename
from pyshelf.model.metadata import read_package_info
from pyshelf.model.names import normalize
from pyshelf.storage import copy, make_key


MISMATCH_MESSAGE = "Uploaded filename does not correspond to file metadata"
STORAGE_MESSAGE = "Unable to store distribution"


class Stage(Enum):
    RECEIVING = "receiving"
    STAGED = "staged"
    COPIED = "copied"
    VALIDATING = "validating"
    FINALIZED = "finalized"
    REJECTED = "rejected"
    CLEANED_UP = "cleaned up"


def receive(files):
    """
    Pick the distribution file out of a decoded multipart body.

    twine and setuptools send the distribution as the "content" field;
    other clients get their first file part used.

    :param files: the request's `MultiDict` of `FileStorage` parts
    """
    upload_file = files.get("content")
    if upload_file is None:
        upload_file = next(iter(files.values()), None)

    if upload_file is None or not upload_file.filename:
        raise MalformedUploadError("Missing distribution file in upload")

    if "/" in upload_file.filename or "\\" in upload_file.filename:
        raise MalformedUploadError("Invalid distribution filename: {}".format(upload_file.filename))

    return upload_file


class UploadHandler(Handler):
    """
    Store uploaded distributions under their normalized project name.
    """

    def handle(self, request):
        try:
            destination = self.upload(request.path, request.files)
        except PyshelfError as error:
            self.logger.warning("Rejected upload to: {}: {}".format(request.path, error))
            # storage failures may name server paths
            if isinstance(error, StorageError):
                raise BadRequestError(STORAGE_MESSAGE)
            raise BadRequestError(str(error))

        self.logger.info("Stored distribution at: {}".format(destination))
        return make_response("", codes.created)

    def upload(self, path, files):
        """
        Run an upload through all stages.

        :param path: the request path, used as key prefix
        :param files: the decoded multipart file parts
        :returns: the destination key
        """
        self.logger.info("Receiving upload to: {}".format(path))
        prefix = make_key(path)
        upload_file = receive(files)
        filename = upload_file.filename

        staging = StagingArea(self.temp_dir, self.logger)
        key = staging.new_key()
        copied = False
        try:
            staging.storage.save(key, upload_file.read())
            self._advance(Stage.STAGED, key, filename)

            copy(staging.storage, self.storage, [key])
            copied = True
            self._advance(Stage.COPIED, key, filename)

            return self._finalize(key, staging.path(key), prefix, filename)
        except Exception:
            if copied:
                self._reject(key, filename)
            raise
        finally:
            staging.close()
            self._advance(Stage.CLEANED_UP, key, filename)

    def _finalize(self, key, staged_path, prefix, filename):
        """
        Validate the staged archive and move the scratch object into place.
        """
        self._advance(Stage.VALIDATING, key, filename)
        try:
            info = read_package_info(staged_path, filename)
        except MetadataError as error:
            self.logger.info("Unable to read metadata for: {}: {}".format(filename, error))
            raise FilenameMismatchError(MISMATCH_MESSAGE)

        if not is_valid_filename(info, filename):
            self.logger.info("Conflicting filename: {} and metadata: {}".format(filename, info))
            raise FilenameMismatchError(MISMATCH_MESSAGE)

        destination = make_key(prefix, normalize(info.name), filename)
        self.storage.move(key, destination)
        self._advance(Stage.FINALIZED, key, filename)
        return destination

    def _reject(self, key, filename):
        """
        Remove the scratch object of a failed upload.
        """
        try:
            self.storage.delete(key)
        except StorageError as error:
            self.logger.warning("Unable to remove scratch object: {}: {}".format(key, error))
        self._advance(Stage.REJECTED, key, filename)

    def _advance(self, stage, key, filename):
        self.logger.debug("Upload of: {} ({}) is {}".format(filename, key, stage.value))
