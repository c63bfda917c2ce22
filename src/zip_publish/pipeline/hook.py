"""
Build-completion trigger.

Build tools call BuildHook.on_build_complete() after a build finishes;
the pipeline only runs for production build modes.
"""

import logging
from typing import Callable

from zip_publish.pipeline.config import PublishConfig
from zip_publish.pipeline.core import PublishPipeline, PublishResult

logger = logging.getLogger(__name__)


class BuildHook:
    """Runs the publish pipeline when a production build completes."""

    def __init__(
        self,
        config: PublishConfig,
        pipeline_factory: Callable[[PublishConfig], PublishPipeline] = PublishPipeline,
    ):
        self.config = config
        self._pipeline_factory = pipeline_factory

    def should_publish(self, mode: str) -> bool:
        """Return True if a build in this mode triggers a publish."""
        return mode in self.config.production_modes

    def on_build_complete(self, mode: str) -> PublishResult | None:
        """
        Handle a build completion signal.

        Args:
            mode: Build mode reported by the build tool

        Returns:
            PublishResult, or None if the mode does not trigger a publish
        """
        if not self.should_publish(mode):
            logger.debug(f"Build mode {mode!r} does not publish {self.config.app}")
            return None

        return self._pipeline_factory(self.config).run()
