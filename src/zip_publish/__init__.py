"""
Zip Publish - Post-build release pipeline.

Packages a build output directory into a daily-versioned zip archive,
keeps only today's local artifacts, uploads the archive over SFTP and
announces the download link on a DingTalk robot.
"""

__version__ = "0.1.0"

# Pipeline is available but not exported by default
# Import explicitly: from zip_publish.pipeline import PublishPipeline

__all__ = []
