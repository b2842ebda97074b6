"""Dependency injection container for docmirror."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from docmirror.config import MirrorConfig
from docmirror.core.interfaces import ChangeSourcePort, MirrorPort
from docmirror.core.models import ChangeBatch, PassSummary


@dataclass
class Container:
    """DI container holding all ports and adapters."""

    config: MirrorConfig
    mirror: MirrorPort
    change_source: ChangeSourcePort

    @staticmethod
    def create_default(config: MirrorConfig) -> Container:
        """Create a container with production adapters."""
        from docmirror.adapters.fs_watcher import WatchdogChangeSource
        from docmirror.mirror.walker import TreeMirror

        mirror = TreeMirror(
            source_root=config.source,
            output_root=config.site_dir,
            source_suffix=config.source_suffix,
            output_suffix=config.output_suffix,
        )

        return Container(
            config=config,
            mirror=mirror,
            change_source=WatchdogChangeSource(),
        )

    @staticmethod
    def create_for_testing(
        config: MirrorConfig | None = None,
        mirror: MirrorPort | None = None,
        change_source: ChangeSourcePort | None = None,
    ) -> Container:
        """Create a container with test/mock adapters.

        All parameters are optional. Provide mocks for the components
        you want to control in tests.
        """
        if config is None:
            config = MirrorConfig(source="/tmp/docmirror/docs", site_dir="/tmp/docmirror/site")

        # Use stubs that raise if accidentally called without being mocked
        class StubMirror(MirrorPort):
            @property
            def source_root(self) -> Path:
                return Path(config.source)

            @property
            def output_root(self) -> Path:
                return Path(config.site_dir)

            def prepare(self) -> None:
                raise NotImplementedError("Provide a mock mirror")

            def run(self) -> PassSummary:
                raise NotImplementedError("Provide a mock mirror")

            def is_trigger(self, path: Path) -> bool:
                raise NotImplementedError("Provide a mock mirror")

        class StubChangeSource(ChangeSourcePort):
            def start(self, root: Path, callback: Callable[[ChangeBatch], None]) -> None:
                raise NotImplementedError("Provide a mock change_source")

            def stop(self) -> None:
                pass

        return Container(
            config=config,
            mirror=mirror or StubMirror(),
            change_source=change_source or StubChangeSource(),
        )
