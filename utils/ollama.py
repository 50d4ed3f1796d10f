import asyncio
import logging
from typing import Optional

from config import load_config
from errors import DrillGenerationError

logger = logging.getLogger(__name__)

async def call_llm(
    prompt: str,
    model: Optional[str] = None,
    timeout: Optional[int] = None,
    json_format: bool = True,
) -> str:
    """Run a prompt through the local Ollama model and return its output.

    Raises DrillGenerationError when the binary is missing, the call times
    out or the process exits non-zero.
    """
    config = load_config()
    model = model or config.get('ollama', {}).get('model', 'llama3.2')
    timeout = timeout or config.get('ollama', {}).get('timeout', 60)
    cmd = ['ollama', 'run', model]
    if json_format:
        cmd += ['--format', 'json']
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise DrillGenerationError("Ollama is not installed", details={"model": model}) from e
    try:
        stdout, stderr = await asyncio.wait_for(
            process.communicate(prompt.encode('utf-8')), timeout=timeout
        )
    except asyncio.TimeoutError as e:
        process.kill()
        await process.wait()
        raise DrillGenerationError(
            f"Ollama call timed out after {timeout}s", details={"model": model}
        ) from e
    except asyncio.CancelledError:
        # Caller went away; don't leave the model process running
        process.kill()
        await process.wait()
        raise
    if process.returncode != 0:
        message = stderr.decode('utf-8', errors='replace').strip()
        logger.error("Ollama exited with %s: %s", process.returncode, message)
        raise DrillGenerationError(
            "Ollama call failed", details={"model": model, "stderr": message[:500]}
        )
    return stdout.decode('utf-8', errors='replace').strip()
