"""
Artifact storage backends.
"""
from pyshelf.storage.storage import Storage, copy, make_key  # noqa
