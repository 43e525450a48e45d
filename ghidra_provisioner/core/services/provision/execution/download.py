"""
L4 Execution — Archive download.

Streams a URL to a local file.  No checksum or signature verification:
the release URL is trusted as configured.
"""

from __future__ import annotations

import logging
import urllib.request
from pathlib import Path

from ghidra_provisioner import __version__
from ghidra_provisioner.core.errors import DownloadFailure
from ghidra_provisioner.core.services.provision.domain.download_helpers import (
    fmt_size,
    progress_step,
)

logger = logging.getLogger(__name__)

_CHUNK = 8192


def download_file(url: str, dest: Path, *, timeout: int | None = None) -> int:
    """Download ``url`` to ``dest``, overwriting it.

    Logs progress every 5% when the server sends ``Content-Length``.

    Returns:
        Number of bytes written.

    Raises:
        DownloadFailure: Any network, HTTP, or write error.  A partial
            file is removed.
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    downloaded = 0
    try:
        req = urllib.request.Request(
            url, headers={"User-Agent": f"ghidra-provisioner/{__version__}"},
        )
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            total = int(resp.headers.get("Content-Length") or 0)
            last_pct = 0
            with open(dest, "wb") as f:
                while True:
                    chunk = resp.read(_CHUNK)
                    if not chunk:
                        break
                    f.write(chunk)
                    downloaded += len(chunk)

                    pct = progress_step(downloaded, total, last_pct)
                    if pct is not None:
                        last_pct = pct
                        logger.info(
                            "Download progress: %d%% (%s / %s)",
                            pct, fmt_size(downloaded), fmt_size(total),
                        )
    except (OSError, ValueError) as e:
        # URLError / HTTPError are OSError subclasses; ValueError covers bad URLs.
        dest.unlink(missing_ok=True)
        raise DownloadFailure(f"Download failed: {url}", detail=str(e)) from e

    logger.info("Downloaded %s to %s", fmt_size(downloaded), dest)
    return downloaded
