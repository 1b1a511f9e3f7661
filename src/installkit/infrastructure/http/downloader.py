from __future__ import annotations

import http.client
import logging
import shutil
import urllib.request
from pathlib import Path

from installkit.core.errors import DownloadFailedError

logger = logging.getLogger(__name__)

USER_AGENT = "installkit/0.1"
_CHUNK_SIZE = 1024 * 1024


def download_to_file(url: str, destination: Path, timeout: float | None = None) -> None:
    """Stream ``url`` into ``destination``, which must not exist yet.

    Redirects are followed. Any transport error or non-2xx status raises
    DownloadFailedError, and a partially written destination is removed.
    """
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT}, method="GET")
    try:
        response = (
            urllib.request.urlopen(request)
            if timeout is None
            else urllib.request.urlopen(request, timeout=timeout)
        )
    except (OSError, ValueError, http.client.HTTPException) as exc:
        raise DownloadFailedError(f"Download failed for {url}: {exc}") from exc

    with response:
        status = getattr(response, "status", None)
        # file:// responses carry no status
        if status is not None and not 200 <= int(status) < 300:
            raise DownloadFailedError(f"Download failed for {url}: HTTP {status}")

        try:
            out = destination.open("xb")
        except FileExistsError as exc:
            raise DownloadFailedError(
                f"Refusing to overwrite existing file: {destination}"
            ) from exc

        try:
            with out:
                shutil.copyfileobj(response, out, _CHUNK_SIZE)
        except (OSError, http.client.HTTPException) as exc:
            destination.unlink(missing_ok=True)
            raise DownloadFailedError(f"Download failed for {url}: {exc}") from exc

    logger.debug("Wrote %s", destination)
