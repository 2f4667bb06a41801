"""Gemini CLI client for free-text prompts."""

import subprocess
from typing import Optional


GEMINI_COMMAND = "gemini"


def _run_gemini_cli(
    prompt: str,
    timeout: int = 120,
    cwd: Optional[str] = None,
) -> str:
    """
    Run Gemini CLI with a prompt and return raw output.

    Args:
        prompt: The prompt to send to Gemini.
        timeout: Timeout in seconds (default 120).
        cwd: Working directory for the subprocess (optional).

    Returns:
        The raw stdout from Gemini CLI.

    Raises:
        RuntimeError: If Gemini CLI is missing, fails or times out.
    """
    cmd = [
        GEMINI_COMMAND,
        '--allowed-mcp-server-names', 'none',
        '-o', 'text',
        prompt
    ]

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
            cwd=cwd
        )
        return result.stdout.strip()

    except FileNotFoundError as e:
        raise RuntimeError(f"Gemini CLI not found on PATH ('{GEMINI_COMMAND}')") from e
    except subprocess.TimeoutExpired:
        raise RuntimeError(f"Gemini CLI timed out after {timeout}s")
    except subprocess.CalledProcessError as e:
        raise RuntimeError(
            f"Gemini CLI failed with exit code {e.returncode}.\n"
            f"Stderr: {e.stderr}"
        ) from e


def process_prompt(
    prompt: str,
    timeout: int = 120,
) -> str:
    """
    Process a simple text prompt using Gemini CLI.

    Returns the raw text response, without wrapping the prompt or expecting
    any structured output.

    Args:
        prompt: The prompt to send to Gemini.
        timeout: Timeout in seconds (default 120).

    Returns:
        The text response from Gemini.

    Raises:
        RuntimeError: If Gemini CLI fails or times out.
    """
    return _run_gemini_cli(prompt, timeout=timeout)
