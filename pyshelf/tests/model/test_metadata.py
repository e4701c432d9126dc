"""
Test archive metadata extraction.
"""
from io import BytesIO
from shutil import rmtree
from tempfile import mkdtemp
from zipfile import ZipFile

import pytest

from pyshelf.exceptions import MetadataError
from pyshelf.model.metadata import (ArchiveFormat,
                                    PackageInfo,
                                    find_entry,
                                    read_package_info)
from pyshelf.tests.fixtures import (compress,
                                    make_sdist,
                                    make_wheel,
                                    make_zip_sdist,
                                    mark_encrypted,
                                    metadata,
                                    write)


@pytest.mark.parametrize("filename, expected", [
    ("foo-1.0-py3-none-any.whl", ArchiveFormat.WHEEL),
    ("foo-1.0.zip", ArchiveFormat.ZIP),
    ("foo-1.0.tar", ArchiveFormat.TAR),
    ("foo-1.0.tar.gz", ArchiveFormat.TAR_GZ),
    ("foo-1.0.tar.bz2", ArchiveFormat.TAR_BZ2),
    ("foo-1.0.tar.Z", ArchiveFormat.TAR_Z),
    ("foo-1.0.tar.z", None),
    ("foo-1.0.exe", None),
    ("foo", None),
])
def test_archive_format_from_filename(filename, expected):
    assert ArchiveFormat.from_filename(filename) is expected


def test_find_entry_prefers_shallowest():
    names = ["foo-1.0/src/foo.egg-info/PKG-INFO", "foo-1.0/PKG-INFO", "foo-1.0/setup.py"]
    assert find_entry(names, ["PKG-INFO"]) == "foo-1.0/PKG-INFO"


def test_find_entry_requires_directory():
    assert find_entry(["PKG-INFO"], ["PKG-INFO"]) is None


def test_find_entry_is_case_sensitive():
    assert find_entry(["foo-1.0.dist-info/metadata"], ["METADATA"]) is None


def test_find_entry_falls_back():
    names = ["foo-1.0/foo.dist-info/METADATA"]
    assert find_entry(names, ["PKG-INFO", "METADATA"]) == "foo-1.0/foo.dist-info/METADATA"


def zip_with_entry(name, content):
    buffer_ = BytesIO()
    with ZipFile(buffer_, "w") as archive:
        archive.writestr(name, content)
    return buffer_.getvalue()


class TestReadPackageInfo(object):

    def setup_method(self):
        self.directory = mkdtemp()

    def teardown_method(self):
        rmtree(self.directory)

    def test_wheel(self):
        path = write(self.directory, "foo-1.0-py3-none-any.whl", make_wheel("foo", "1.0", "Foo things"))
        assert read_package_info(path) == PackageInfo("foo", "1.0", "Foo things")

    @pytest.mark.parametrize("filename, mode", [
        ("foo-1.0.tar.gz", "w:gz"),
        ("foo-1.0.tar.bz2", "w:bz2"),
        ("foo-1.0.tar", "w"),
    ])
    def test_tar_sdist(self, filename, mode):
        path = write(self.directory, filename, make_sdist("foo", "1.0", "Foo things", mode=mode))
        assert read_package_info(path) == PackageInfo("foo", "1.0", "Foo things")

    def test_tar_z_sdist(self):
        data = compress(make_sdist("foo", "1.0", "Compressed", mode="w"))
        path = write(self.directory, "foo-1.0.tar.Z", data)
        assert read_package_info(path) == PackageInfo("foo", "1.0", "Compressed")

    def test_zip_sdist(self):
        path = write(self.directory, "foo-1.0.zip", make_zip_sdist("foo", "1.0", "Zipped"))
        assert read_package_info(path) == PackageInfo("foo", "1.0", "Zipped")

    def test_format_from_declared_filename(self):
        """
        Staged uploads have random names; the declared filename picks the format.
        """
        path = write(self.directory, "0123456789abcdef", make_sdist("foo", "1.0"))
        assert read_package_info(path, "foo-1.0.tar.gz").name == "foo"

    def test_missing_summary_defaults_to_empty(self):
        path = write(self.directory, "foo-1.0.tar.gz", make_sdist("foo", "1.0", summary=None))
        assert read_package_info(path).summary == ""

    def test_body_does_not_override_headers(self):
        path = write(self.directory, "foo-1.0.tar.gz", make_sdist("foo", "1.0"))
        assert read_package_info(path).name == "foo"

    def test_missing_metadata_version(self):
        content = "Name: part\nVersion: 0.1\nSummary: s\n"
        path = write(self.directory, "part-0.1.tar.gz", make_sdist("part", "0.1", content=content))
        assert read_package_info(path) == PackageInfo("part", "0.1", "s")

    def test_encrypted_zip(self):
        data = mark_encrypted(make_zip_sdist("foo", "1.0"))
        path = write(self.directory, "foo-1.0.zip", data)
        with pytest.raises(MetadataError):
            read_package_info(path)

    def test_unknown_format(self):
        path = write(self.directory, "foo-1.0.exe", b"MZ")
        with pytest.raises(MetadataError):
            read_package_info(path)

    def test_missing_entry(self):
        path = write(self.directory, "foo-1.0-py3-none-any.whl",
                     make_wheel("foo", "1.0", entry="foo-1.0.dist-info/RECORD"))
        with pytest.raises(MetadataError):
            read_package_info(path)

    def test_wheel_without_metadata_directory(self):
        path = write(self.directory, "foo-1.0-py3-none-any.whl", make_wheel("foo", "1.0", entry="METADATA"))
        with pytest.raises(MetadataError):
            read_package_info(path)

    def test_missing_version(self):
        content = "Metadata-Version: 2.1\nName: foo\nSummary: No version\n"
        path = write(self.directory, "foo-1.0.tar.gz", make_sdist("foo", "1.0", content=content))
        with pytest.raises(MetadataError):
            read_package_info(path)

    def test_invalid_utf8(self):
        content = metadata("bad", "1.0").encode("utf-8") + b"\xff\xfe"
        path = write(self.directory, "bad-1.0.zip", zip_with_entry("bad-1.0/PKG-INFO", content))
        with pytest.raises(MetadataError):
            read_package_info(path)

    @pytest.mark.parametrize("filename", [
        "foo-1.0-py3-none-any.whl",
        "foo-1.0.zip",
        "foo-1.0.tar",
        "foo-1.0.tar.gz",
        "foo-1.0.tar.bz2",
        "foo-1.0.tar.Z",
    ])
    def test_garbage(self, filename):
        path = write(self.directory, filename, b"python code")
        with pytest.raises(MetadataError):
            read_package_info(path)

