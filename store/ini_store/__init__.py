"""
ini_store package
-----------------
Live key-value configuration backed by an INI-style file: parsing, in-memory
edits, per-entry handlers and saving back to disk.
"""

from .configuration import ConfigHandler, ConfigStore, SectionKeyPair
from .numeric import parse_number

__version__ = "0.1.0"

__all__ = [
    "ConfigHandler",
    "ConfigStore",
    "SectionKeyPair",
    "parse_number",
]
