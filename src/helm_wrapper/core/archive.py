"""Unpack packaged charts into a scratch directory."""

from __future__ import annotations

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from helm_wrapper.core.executor import Executor
from helm_wrapper.errors import ExtractionFailed, ProcessStartFailed
from helm_wrapper.models.invocation import CommandInvocation

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIXES = (".tgz", ".tar.gz")


def is_chart_archive(chart: str) -> bool:
    return chart.endswith(ARCHIVE_SUFFIXES)


def _chart_root(extract_dir: Path, manifest_name: str) -> Path:
    """Return the directory holding the chart inside an extracted archive.

    ``helm package`` nests the chart under a directory named after it.
    """
    if (extract_dir / manifest_name).is_file():
        return extract_dir
    children = list(extract_dir.iterdir())
    if len(children) == 1 and children[0].is_dir() and (children[0] / manifest_name).is_file():
        return children[0]
    return extract_dir


@contextmanager
def extract_chart_archive(
    archive: str | Path,
    tar_binary: str = "tar",
    executor: Executor | None = None,
    manifest_name: str = "Chart.yaml",
) -> Iterator[Path]:
    """Extract ``archive`` and yield the chart directory.

    The scratch directory is removed when the block exits, however it exits.
    """
    executor = executor or Executor()
    with tempfile.TemporaryDirectory(prefix="helm-chart-") as tmp:
        tmp_dir = Path(tmp)
        logger.info("Extracting chart archive %s to %s", archive, tmp_dir)
        invocation = CommandInvocation(
            binary=tar_binary,
            args=("-xzf", str(archive), "-C", str(tmp_dir)),
        )
        try:
            code = executor.run(invocation, forward_stdin=False)
        except ProcessStartFailed as exc:
            raise ExtractionFailed(f"failed to extract chart archive {archive}: {exc}") from exc
        if code != 0:
            raise ExtractionFailed(f"failed to extract chart archive {archive}: {tar_binary} exited with code {code}")
        yield _chart_root(tmp_dir, manifest_name)
