"""
Zip Publish Pipeline Module.

Configuration, the stage-sequential publish pipeline and the
build-completion trigger.
"""

from zip_publish.pipeline.config import PublishConfig, load_config
from zip_publish.pipeline.core import PublishPipeline, PublishResult, PublishStatus
from zip_publish.pipeline.hook import BuildHook

__all__ = [
    "PublishConfig",
    "load_config",
    "PublishPipeline",
    "PublishResult",
    "PublishStatus",
    "BuildHook",
]
