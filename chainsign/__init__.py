"""chainsign - signature devices with tamper-evident signature chains.

Issues signature devices bound to an algorithm and key pair, and signs client
data so that every signature is chained to the one before it.
"""

__version__ = "0.1.0"
__author__ = "chainsign Contributors"

from chainsign.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
