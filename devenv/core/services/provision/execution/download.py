"""
L4 Execution — Downloads with mirror fallback and archive checks.

``fetch_with_fallback`` walks an ordered list of sources, stopping at
the first one that yields a usable file.  A file left behind by a
failed or corrupt attempt is deleted before the next source is tried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from devenv.core.services.provision.data.constants import (
    ARCHIVE_LIST_TIMEOUT,
    DOWNLOAD_MAX_TIME,
    DOWNLOAD_TIMEOUT,
    DOWNLOAD_TRIES,
)
from devenv.core.services.provision.execution.subprocess_runner import Runner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchSource:
    """One candidate: a URL and the downloader used to fetch it."""

    url: str
    downloader: str


@dataclass
class FetchOutcome:
    """Result of a best-effort fetch."""

    ok: bool = False
    source: FetchSource | None = None
    attempts: list[dict[str, Any]] = field(default_factory=list)

    @property
    def tried_urls(self) -> list[str]:
        return [a["url"] for a in self.attempts]


def download_command(
    url: str,
    dest: Path,
    downloader: str,
    *,
    bounded: bool = True,
) -> list[str]:
    """Build the ``wget``/``curl`` command for one download attempt.

    Args:
        url: Source URL.
        dest: Output file.
        downloader: ``"wget"`` or ``"curl"``.
        bounded: Apply the per-attempt timeout / retry limits.
    """
    if downloader == "wget":
        cmd = ["wget"]
        if bounded:
            cmd += [f"--timeout={DOWNLOAD_TIMEOUT}", f"--tries={DOWNLOAD_TRIES}"]
        return cmd + [url, "-O", str(dest)]
    if downloader == "curl":
        cmd = ["curl", "-fL"]
        if bounded:
            cmd += [
                "--connect-timeout", str(DOWNLOAD_TIMEOUT),
                "--max-time", str(DOWNLOAD_MAX_TIME),
            ]
        return cmd + [url, "-o", str(dest)]
    raise ValueError(f"Unsupported downloader: {downloader}")


def verify_archive(path: Path, runner: Runner) -> bool:
    """Integrity check: the gzip tarball can be listed end to end."""
    result = runner(
        ["tar", "-tzf", str(path)],
        capture=True,
        timeout=ARCHIVE_LIST_TIMEOUT,
    )
    return bool(result.get("ok"))


def fetch_with_fallback(
    sources: list[FetchSource],
    dest: Path,
    attempt: Callable[[FetchSource, Path], dict[str, Any]],
    *,
    verify: Callable[[Path], bool] | None = None,
) -> FetchOutcome:
    """Try each source in order until one produces a valid ``dest``.

    Args:
        sources: Ordered candidates.  Nothing after the first success
            is attempted.
        dest: File every attempt writes to.
        attempt: Performs one download; returns a runner result dict.
        verify: Optional integrity check run on ``dest`` after a
            successful attempt.  A failing file is deleted and the
            next source is tried.

    Returns:
        ``FetchOutcome`` with ``ok=False`` when every source failed.
    """
    outcome = FetchOutcome()

    for source in sources:
        logger.info("Trying: %s", source.url)
        result = attempt(source, dest)
        record = {"url": source.url, "downloader": source.downloader, "ok": False}

        if result.get("ok"):
            if verify is None or verify(dest):
                record["ok"] = True
                outcome.attempts.append(record)
                outcome.ok = True
                outcome.source = source
                return outcome
            record["error"] = "downloaded file failed integrity check"
            logger.warning("Download from %s is corrupted, discarding", source.url)
            dest.unlink(missing_ok=True)
        else:
            record["error"] = result.get("error", "download failed")
            logger.warning("Download failed: %s (%s)", source.url, record["error"])
            # A partial file is kept only if it is a complete archive;
            # the next attempt overwrites it either way.
            if dest.exists() and (verify is None or not verify(dest)):
                dest.unlink(missing_ok=True)

        outcome.attempts.append(record)

    return outcome
