"""
Package metadata extraction from distribution archives.
"""
import re
import tarfile
import zlib
from collections import namedtuple
from enum import Enum
from fnmatch import fnmatchcase
from io import BytesIO
from os.path import basename
from zipfile import BadZipFile, ZipFile

from pkginfo import Distribution
from unlzw3 import unlzw

from pyshelf.exceptions import MetadataError


PackageInfo = namedtuple("PackageInfo", ["name", "version", "summary"])


class ArchiveFormat(Enum):
    """
    Supported distribution archives, keyed by filename suffix.
    """
    WHEEL = ".whl"
    ZIP = ".zip"
    TAR = ".tar"
    TAR_GZ = ".tar.gz"
    TAR_BZ2 = ".tar.bz2"
    TAR_Z = ".tar.Z"

    @property
    def suffix(self):
        return self.value

    @classmethod
    def from_filename(cls, filename):
        """
        Determine the archive format of a filename.

        :returns: an `ArchiveFormat` or None if the suffix is not recognized
        """
        for archive_format in cls:
            if filename.endswith(archive_format.suffix):
                return archive_format
        return None


# metadata entries searched for, in order of preference
ENTRIES = {
    ArchiveFormat.WHEEL: ["METADATA"],
    ArchiveFormat.ZIP: ["PKG-INFO", "METADATA"],
    ArchiveFormat.TAR: ["PKG-INFO"],
    ArchiveFormat.TAR_GZ: ["PKG-INFO"],
    ArchiveFormat.TAR_BZ2: ["PKG-INFO"],
    ArchiveFormat.TAR_Z: ["PKG-INFO"],
}

TAR_MODES = {
    ArchiveFormat.TAR: "r:",
    ArchiveFormat.TAR_GZ: "r:gz",
    ArchiveFormat.TAR_BZ2: "r:bz2",
}

# everything an unreadable, truncated or encrypted archive may raise
ARCHIVE_ERRORS = (BadZipFile,
                  tarfile.TarError,
                  zlib.error,
                  EOFError,
                  OSError,
                  ValueError,
                  RuntimeError,
                  NotImplementedError)

# assumed when an entry has no Metadata-Version header
DEFAULT_METADATA_VERSION = "1.0"

METADATA_VERSION_HEADER = re.compile(r"^Metadata-Version:", re.MULTILINE | re.IGNORECASE)
HEADER_END = re.compile(r"\r?\n\r?\n")


def find_entry(names, entries):
    """
    Pick the metadata entry out of an archive listing.

    Only entries nested at least one directory deep are considered
    (e.g. "foo-1.0/PKG-INFO"); the shallowest match wins.
    """
    for entry in entries:
        matches = [name for name in names if fnmatchcase(name, "*/{}".format(entry))]
        if matches:
            return min(matches, key=lambda name: name.count("/"))
    return None


def read_zip_entry(path, entries):
    with ZipFile(path) as archive:
        name = find_entry(archive.namelist(), entries)
        if name is None:
            raise MetadataError("No metadata entry found in: {}".format(basename(path)))
        return archive.read(name)


def open_tar(path, archive_format):
    if archive_format is ArchiveFormat.TAR_Z:
        with open(path, "rb") as file_:
            return tarfile.open(fileobj=BytesIO(unlzw(file_.read())), mode="r:")
    return tarfile.open(path, mode=TAR_MODES[archive_format])


def read_tar_entry(path, archive_format, entries):
    with open_tar(path, archive_format) as archive:
        members = {member.name: member for member in archive.getmembers() if member.isfile()}
        name = find_entry(list(members), entries)
        if name is None:
            raise MetadataError("No metadata entry found in: {}".format(basename(path)))
        return archive.extractfile(members[name]).read()


class ArchiveDistribution(Distribution):
    """
    A `pkginfo` distribution read from the metadata entry of an archive.
    """

    def __init__(self, path, archive_format, metadata_version=None):
        self.path = path
        self.archive_format = archive_format
        self.metadata_version = metadata_version
        self.extractMetadata()

    def read(self):
        entries = ENTRIES[self.archive_format]
        if self.archive_format in (ArchiveFormat.WHEEL, ArchiveFormat.ZIP):
            data = read_zip_entry(self.path, entries)
        else:
            data = read_tar_entry(self.path, self.archive_format, entries)
        return data.decode("utf-8")

    def parse(self, data):
        """
        Parse the entry, assuming the oldest metadata version when the
        headers do not declare one.
        """
        headers = HEADER_END.split(data, 1)[0]
        if self.metadata_version is None and not METADATA_VERSION_HEADER.search(headers):
            self.metadata_version = DEFAULT_METADATA_VERSION
        super(ArchiveDistribution, self).parse(data)


def read_package_info(path, filename=None):
    """
    Extract package metadata from a distribution archive.

    :param path: local path to the archive
    :param filename: original filename, used to determine the archive format
                     when the local path does not carry one
    :returns: a `PackageInfo`
    :raises: MetadataError if the archive is unreadable or its metadata incomplete
    """
    archive_format = ArchiveFormat.from_filename(filename or basename(path))
    if archive_format is None:
        raise MetadataError("Unsupported archive format: {}".format(filename or basename(path)))

    try:
        distribution = ArchiveDistribution(path, archive_format)
    except MetadataError:
        raise
    except ARCHIVE_ERRORS as error:
        raise MetadataError("Unable to read archive: {}: {}".format(basename(path), error))

    if not distribution.name or not distribution.version:
        raise MetadataError("Missing name or version in: {}".format(basename(path)))

    return PackageInfo(distribution.name, distribution.version, distribution.summary or "")
