"""
Mermaid error detection agent.

Asks a hosted Gemini model whether a piece of Mermaid code is valid, using
LangChain structured output. Transport failures, timeouts and unusable
answers are reported as an indeterminate verdict and never raised to the
validation pipeline.

Dependencies: langchain_core, langchain_google_genai, pydantic
System role: AI checker side of the dual-validation pipeline
"""

import asyncio
import logging

from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import ValidationError

from visualizer.core.agentic_system.error_detection_agent.mermaid_error_prompt import (
    get_error_detection_prompt,
)
from visualizer.core.agentic_system.error_detection_agent.mermaid_error_schema import (
    MermaidErrorInput,
    MermaidErrorReport,
)
from visualizer.core.exceptions import AiIndeterminateError
from visualizer.models.diagram import AiVerdict
from visualizer.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

NO_OUTPUT_MESSAGE = "Failed to generate output from the prompt."


class MermaidErrorAgent:
    """
    Error detection agent for Mermaid code.

    Chains the fixed prompt into a Gemini chat model bound to the
    MermaidErrorReport schema.
    """

    def __init__(
        self,
        google_api_key: str | None = None,
        model_id: str = "gemini-2.0-flash",
        temperature: float = 0.0,
        timeout_seconds: float = 20.0,
        chain: Runnable | None = None,
    ) -> None:
        """
        Initialize error detection agent.

        Args:
            google_api_key: Google API key (falls back to GOOGLE_API_KEY env)
            model_id: Gemini model identifier
            temperature: Model temperature (0.0 for deterministic)
            timeout_seconds: Upper bound for one model call
            chain: Prebuilt runnable taking {"code": ...}; skips model creation
        """
        self._model_id = model_id
        self._timeout = timeout_seconds

        if chain is None:
            model = ChatGoogleGenerativeAI(
                model=model_id,
                temperature=temperature,
                google_api_key=google_api_key,
                max_retries=0,
            )
            chain = get_error_detection_prompt() | model.with_structured_output(
                MermaidErrorReport
            )
        self._chain = chain

    async def detect_errors(self, code: str) -> MermaidErrorReport:
        """
        Run the error detection flow.

        Args:
            code: Mermaid code, passed to the model unmodified

        Returns:
            MermaidErrorReport: Structured verdict from the model

        Raises:
            AiIndeterminateError: If the call fails, times out or yields no usable output
        """
        try:
            result = await asyncio.wait_for(
                self._chain.ainvoke(MermaidErrorInput(code=code).model_dump()),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise AiIndeterminateError(
                f"AI error check timed out after {self._timeout:g}s",
                details={"model_id": self._model_id},
            ) from e
        except Exception as e:
            raise AiIndeterminateError(
                f"AI error check failed: {type(e).__name__}: {e}",
                details={"model_id": self._model_id},
            ) from e

        if result is None:
            raise AiIndeterminateError(NO_OUTPUT_MESSAGE)
        if isinstance(result, dict):
            try:
                result = MermaidErrorReport.model_validate(result)
            except ValidationError as e:
                raise AiIndeterminateError(f"Unparseable AI response: {e.error_count()} errors") from e
        if not isinstance(result, MermaidErrorReport):
            raise AiIndeterminateError(
                f"Unexpected AI response type: {type(result).__name__}"
            )
        return result

    async def check(self, text: str) -> AiVerdict:
        """
        Check diagram text and reduce the model answer to a verdict.

        Args:
            text: Diagram source

        Returns:
            AiVerdict: valid, invalid(message) or indeterminate
        """
        try:
            report = await self.detect_errors(text)
        except AiIndeterminateError as e:
            log_exception_with_context(
                logger,
                "AI error check failed; falling back to renderer verdict",
                e,
                level=logging.WARNING,
                model_id=self._model_id,
                text_len=len(text),
            )
            return AiVerdict.indeterminate()

        if report.is_valid:
            return AiVerdict.valid()
        return AiVerdict.invalid(report.consolidated_message())
