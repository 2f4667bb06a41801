"""AI narrative advice for a payroll result.

The advisor never affects the calculation: any failure of the text
generator degrades to a fixed message. AdvisorSession runs requests as
asyncio tasks tagged with a revision so a slow answer for old inputs is
dropped once newer inputs have been submitted.
"""

import asyncio
import logging
from typing import Callable, Optional

from .. import gemini_client
from .config import get_setting
from .schemas import PayrollResult

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Error al conectar con el asesor financiero AI."
EMPTY_MESSAGE = "No se pudo obtener el análisis."
DEFAULT_TIMEOUT = 60

TextGenerator = Callable[..., str]


def build_advice_prompt(result: PayrollResult, bonus_days: float) -> str:
    """Build the advisor prompt from the headline figures of a result."""
    return (
        "Analiza este sueldo en México:\n"
        f"Bruto Mensual: {result.gross_monthly:.2f} MXN.\n"
        f"Neto Mensual: {result.net_monthly:.2f} MXN.\n"
        f"Costo Total Empresa: {result.employer_cost.total_monthly:.2f} MXN.\n"
        f"Prestaciones de Ley: {bonus_days:g} días de aguinaldo, "
        f"{result.vacation_days} días de vacaciones.\n"
        "¿Es competitivo? Da 3 consejos breves."
    )


def _get_timeout(timeout: Optional[int]) -> int:
    if timeout is not None:
        return timeout
    return int(get_setting("ai_timeout", DEFAULT_TIMEOUT))


def get_advice(prompt: str, generate: Optional[TextGenerator] = None, timeout: Optional[int] = None) -> str:
    """Ask the text generator for advice.

    Args:
        prompt: Prompt from build_advice_prompt()
        generate: Callable(prompt, timeout=...) -> str; defaults to Gemini CLI
        timeout: Seconds to wait; defaults to the ai_timeout setting

    Returns:
        The advice text, EMPTY_MESSAGE for a blank answer, or FALLBACK_MESSAGE
        if the generator raised anything
    """
    if generate is None:
        generate = gemini_client.process_prompt
    try:
        text = generate(prompt, timeout=_get_timeout(timeout))
    except Exception as e:
        logger.warning(f"AI advisor unavailable: {e}")
        return FALLBACK_MESSAGE
    if not text or not text.strip():
        return EMPTY_MESSAGE
    return text.strip()


class AdvisorSession:
    """Serializes advice requests so only the latest inputs get an answer.

    Each request() bumps the revision and cancels the in-flight task. A
    request whose revision is no longer current resolves to None.
    """

    def __init__(self, generate: Optional[TextGenerator] = None, timeout: Optional[int] = None):
        self._generate = generate
        self._timeout = timeout
        self._revision = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def revision(self) -> int:
        return self._revision

    def cancel(self) -> None:
        """Invalidate any pending request."""
        self._revision += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def request(self, result: PayrollResult, bonus_days: float) -> Optional[str]:
        """Request advice for a result; None if superseded before it finished."""
        self.cancel()
        revision = self._revision
        prompt = build_advice_prompt(result, bonus_days)

        task = asyncio.create_task(
            asyncio.to_thread(get_advice, prompt, self._generate, self._timeout)
        )
        self._task = task
        try:
            text = await task
        except asyncio.CancelledError:
            if revision != self._revision:
                logger.debug(f"advice revision {revision} superseded by {self._revision}")
                return None
            raise

        if revision != self._revision:
            logger.debug(f"discarding stale advice for revision {revision}")
            return None
        self._task = None
        return text
