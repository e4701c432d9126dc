"""
Filename validation against distribution metadata.
"""
from pyshelf.model.metadata import ArchiveFormat
from pyshelf.model.names import name_match


def split_wheel_filename(stem):
    """
    Split a wheel filename stem into its name and version fields.

    Wheel stems follow "name-version[-build]-python-abi-platform".

    :returns: a (name, version) tuple or None if the stem has the wrong shape
    """
    fields = stem.split("-")
    if len(fields) not in (5, 6):
        return None
    return fields[0], fields[1]


def split_sdist_filename(stem, version):
    """
    Split a source distribution stem given the expected version.

    Project names may contain hyphens, so the version is matched from the right.
    """
    suffix = "-{}".format(version)
    if not stem.endswith(suffix):
        return None
    return stem[:-len(suffix)], version


def is_valid_filename(info, filename):
    """
    Does an uploaded filename correspond to the archive's metadata?

    :param info: the `PackageInfo` read from the archive
    :param filename: the filename declared by the upload
    :returns: whether the upload may be stored under this filename
    """
    archive_format = ArchiveFormat.from_filename(filename)
    if archive_format is None:
        return False

    stem = filename[:-len(archive_format.suffix)]
    if archive_format is ArchiveFormat.WHEEL:
        parts = split_wheel_filename(stem)
    else:
        parts = split_sdist_filename(stem, info.version)

    if parts is None:
        return False

    name, version = parts
    return bool(name) and name_match(name, info.name) and version == info.version
