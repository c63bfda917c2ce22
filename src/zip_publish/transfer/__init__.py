"""
Zip Publish Transfer Module.

Remote transfer backends and the publish orchestrator that drives them.
"""

from .base import RemoteTransfer
from .publisher import Publisher
from .sftp import SftpSettings, SftpTransfer

__all__ = [
    "RemoteTransfer",
    "Publisher",
    "SftpSettings",
    "SftpTransfer",
]
