"""
Project name utilities.
"""
import re


SEPARATORS = re.compile(r"[-_.]+")


def normalize(name):
    """
    Compute the canonical form of a project name.

    Lower-cases the name and collapses every run of "-", "_" and "."
    into a single "-", so that "My_Super.Project" and "my-super-project"
    share one index key.
    """
    return SEPARATORS.sub("-", name).lower()


def name_match(this, that):
    """
    Do two package names match?
    """
    return normalize(this) == normalize(that)
