"""Print surface using the system print command."""

import asyncio
import logging
import shlex
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path

from wedding_share.services.share import PrintSurface

_logger = logging.getLogger(__name__)


@dataclass
class SystemPrintSurface(PrintSurface):
    """Writes the artifact to a temp PNG and hands it to the print command."""

    command: str = "lp"
    timeout_seconds: float = 30.0

    async def print_artifact(self, png_bytes: bytes) -> None:
        await asyncio.to_thread(self._print, png_bytes)

    def _print(self, png_bytes: bytes) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "event-qr.png"
            path.write_bytes(png_bytes)
            result = subprocess.run(
                [*shlex.split(self.command), str(path)],
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                check=False,
            )
        if result.returncode != 0:
            raise RuntimeError(
                f"Print command failed ({result.returncode}): {result.stderr.strip()}"
            )
        _logger.info("QR code sent to printer: %s", result.stdout.strip())
