"""Block Version - protocol version whitelist/blacklist gate for game servers."""

__version__ = "0.1.0"
__author__ = "Block Version Team"
__description__ = "Admission control for Minecraft servers based on the client protocol version"

from typing import Final


# Prefix of the symbolic protocol names ("MINECRAFT_1_12_2")
PROTOCOL_NAME_PREFIX: Final[str] = "MINECRAFT_"

# Permission node namespace
PERMISSION_PREFIX: Final[str] = "eblockversion"
