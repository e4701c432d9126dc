"""
Shared test fixtures.
"""
import tarfile
import zipfile
from io import BytesIO
from os.path import join
from shutil import rmtree
from tempfile import mkdtemp
from textwrap import dedent

from pyshelf.app import create_app


def setup(self, backend="file"):
    """
    Setup an instance of the Flask app with suitable temporary directories.
    """
    self.config_dir = mkdtemp()
    self.config_file = join(self.config_dir, "pyshelf.conf")
    self.storage_dir = mkdtemp()
    self.temp_dir = mkdtemp()

    with open(self.config_file, "w") as file_:
        file_.write('STORAGE_BACKEND = "{}"\n'.format(backend))
        file_.write('STORAGE_DIR = "{}"\n'.format(self.storage_dir))
        file_.write('TEMP_DIR = "{}"\n'.format(self.temp_dir))

    self.app = create_app(testing=True, settings=self.config_file)
    self.client = self.app.test_client()


def teardown(self):
    rmtree(self.storage_dir)
    rmtree(self.temp_dir)
    rmtree(self.config_dir)


def metadata(name, version, summary=None, metadata_version="2.1"):
    """
    Render a PKG-INFO/METADATA document.
    """
    lines = ["Metadata-Version: {}".format(metadata_version),
             "Name: {}".format(name),
             "Version: {}".format(version)]
    if summary is not None:
        lines.append("Summary: {}".format(summary))
    return "\n".join(lines) + "\n\n" + dedent("""\
        Long description: not a header.
        Name: ignored
        """)


def make_wheel(name, version, summary="", entry=None):
    """
    Build wheel bytes with a .dist-info/METADATA entry.
    """
    entry = entry or "{}-{}.dist-info/METADATA".format(name.replace("-", "_"), version)
    buffer_ = BytesIO()
    with zipfile.ZipFile(buffer_, "w") as archive:
        archive.writestr("{}/__init__.py".format(name.replace("-", "_")), "")
        archive.writestr(entry, metadata(name, version, summary))
    return buffer_.getvalue()


def make_zip_sdist(name, version, summary=""):
    buffer_ = BytesIO()
    with zipfile.ZipFile(buffer_, "w") as archive:
        archive.writestr("{}-{}/setup.py".format(name, version), "")
        archive.writestr("{}-{}/PKG-INFO".format(name, version), metadata(name, version, summary))
    return buffer_.getvalue()


def make_sdist(name, version, summary="", mode="w:gz", content=None):
    """
    Build source distribution bytes with a PKG-INFO entry.
    """
    content = content if content is not None else metadata(name, version, summary)
    buffer_ = BytesIO()
    with tarfile.open(fileobj=buffer_, mode=mode) as archive:
        _add_tar_entry(archive, "{}-{}/setup.py".format(name, version), b"")
        _add_tar_entry(archive, "{}-{}/PKG-INFO".format(name, version), content.encode("utf-8"))
    return buffer_.getvalue()


def _add_tar_entry(archive, name, data):
    info = tarfile.TarInfo(name)
    info.size = len(data)
    archive.addfile(info, BytesIO(data))


def write(directory, filename, data):
    path = join(directory, filename)
    with open(path, "wb") as file_:
        file_.write(data)
    return path


def compress(data, max_bits=16):
    """
    LZW-compress bytes the way the Unix "compress" tool does (block mode).

    Code widths grow from 9 bits as the table fills; no clear codes are
    emitted, so every width change falls on a group boundary.
    """
    table = {bytes([value]): value for value in range(256)}
    next_code = 257
    codes = []
    word = b""
    for value in data:
        candidate = word + bytes([value])
        if candidate in table:
            word = candidate
            continue
        codes.append(table[word])
        if next_code < 1 << max_bits:
            table[candidate] = next_code
            next_code += 1
        word = bytes([value])
    if word:
        codes.append(table[word])

    output = bytearray(b"\x1f\x9d")
    output.append(0x80 | max_bits)
    bits, mask, end = 9, 0x1ff, 256
    buffer_, pending = 0, 0
    for index, code in enumerate(codes):
        if end >= mask and bits < max_bits:
            bits += 1
            mask = (mask << 1) | 1
        buffer_ |= code << pending
        pending += bits
        while pending >= 8:
            output.append(buffer_ & 0xff)
            buffer_ >>= 8
            pending -= 8
        if index and end < mask:
            end += 1
    if pending:
        output.append(buffer_ & 0xff)
    return bytes(output)


def mark_encrypted(data):
    """
    Set the "encrypted" flag on every entry of zip bytes.
    """
    data = bytearray(data)
    # (header signature, offset of the general purpose flags)
    for signature, offset in [(b"PK\x03\x04", 6), (b"PK\x01\x02", 8)]:
        start = data.find(signature)
        while start != -1:
            data[start + offset] |= 0x01
            start = data.find(signature, start + len(signature))
    return bytes(data)
