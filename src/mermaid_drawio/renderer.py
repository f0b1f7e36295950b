"""
mermaid-cli invocation.

Renders a Mermaid description file to SVG by running ``mmdc -i <in> -o <out>``
(or whatever MERMAID_CLI names) as a subprocess.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Sequence

from . import config

logger = logging.getLogger(__name__)

INSTALL_HINT = "Make sure @mermaid-js/mermaid-cli is installed: npm install -g @mermaid-js/mermaid-cli"


class RenderError(RuntimeError):
    """mermaid-cli could not be run or did not produce an SVG."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


async def render_mermaid_svg(
    input_path: Path,
    output_path: Path,
    command: Optional[Sequence[str]] = None,
    timeout: Optional[float] = None,
) -> Path:
    """Render input_path to an SVG at output_path.

    Args:
        input_path: Mermaid description (.mmd)
        output_path: Where mermaid-cli writes the SVG
        command: Renderer command, defaults to MERMAID_CLI / ``mmdc``
        timeout: Seconds before the renderer is killed, defaults to
            MERMAID_RENDER_TIMEOUT; unset waits indefinitely

    Returns:
        output_path

    Raises:
        RenderError: on spawn failure, non-zero exit, timeout or missing output
    """
    cmd = [*(command or config.mermaid_command()), '-i', str(input_path), '-o', str(output_path)]
    if timeout is None:
        timeout = config.render_timeout()
    logger.info("Generating SVG with Mermaid CLI: %s", ' '.join(cmd))

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise RenderError(f"Mermaid CLI not found ({cmd[0]}). {INSTALL_HINT}") from e
    except OSError as e:
        raise RenderError(f"Failed to start Mermaid CLI: {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise RenderError(f"Mermaid CLI timed out after {timeout} seconds")

    stderr_text = stderr.decode('utf-8', errors='replace') if stderr else ''
    if stdout:
        logger.debug("mmdc: %s", stdout.decode('utf-8', errors='replace').strip())

    if process.returncode != 0:
        raise RenderError(
            f"Failed to generate SVG with Mermaid CLI (exit {process.returncode}). {INSTALL_HINT}",
            returncode=process.returncode,
            stderr=stderr_text,
        )

    output_path = Path(output_path)
    if not output_path.exists() or output_path.stat().st_size == 0:
        raise RenderError(
            "Mermaid CLI produced no output file",
            returncode=process.returncode,
            stderr=stderr_text,
        )
    return output_path
