"""
Mermaid diagram engine boundary.

Defines the engine protocol (parse / render) and a concrete engine that
drives the Mermaid CLI (`mmdc`) as an asyncio subprocess. The engine's theme
and security configuration is process-wide: it is created once at startup by
`configure_engine()` and never mutated afterwards.

Dependencies: asyncio, pydantic, mermaid-cli (external binary)
System role: Diagram engine boundary
"""

import asyncio
import json
import logging
import re
import shutil
import tempfile
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from visualizer.core.exceptions import DiagramSyntaxError, RendererUnavailableError

logger = logging.getLogger(__name__)

# Diagram type keywords accepted on the first meaningful line.
# Longer keywords first so "stateDiagram-v2" wins over "stateDiagram".
DIAGRAM_KEYWORDS = (
    "architecture-beta",
    "block-beta",
    "packet-beta",
    "radar-beta",
    "sankey-beta",
    "treemap-beta",
    "xychart-beta",
    "classDiagram-v2",
    "stateDiagram-v2",
    "requirementDiagram",
    "sequenceDiagram",
    "classDiagram",
    "stateDiagram",
    "quadrantChart",
    "C4Deployment",
    "C4Component",
    "C4Container",
    "C4Context",
    "C4Dynamic",
    "erDiagram",
    "flowchart",
    "gitGraph",
    "timeline",
    "journey",
    "mindmap",
    "kanban",
    "zenuml",
    "gantt",
    "graph",
    "pie",
)

_KEYWORD_RE = re.compile(
    r"^(?:" + "|".join(re.escape(k) for k in DIAGRAM_KEYWORDS) + r")(?=$|[\s;:])"
)
_LINE_RE = re.compile(r"on line (\d+)")
_STACK_FRAME_RE = re.compile(r"^\s+at\s")


class EngineConfig(BaseModel):
    """
    Immutable Mermaid configuration shared by every render in the process.

    Attributes:
        theme: Mermaid theme name
        security_level: Mermaid securityLevel ("strict", "loose", ...)
        start_on_load: Whether Mermaid scans the page on load (always off server-side)
    """

    model_config = ConfigDict(frozen=True)

    theme: str = Field(default="neutral")
    security_level: str = Field(default="loose")
    start_on_load: bool = Field(default=False)

    def to_mermaid_config(self) -> dict:
        """
        Mermaid `initialize()` configuration object.

        Labels are emitted as SVG `<text>` instead of HTML inside
        `<foreignObject>`, which the PNG rasterizer cannot draw.
        """
        return {
            "startOnLoad": self.start_on_load,
            "theme": self.theme,
            "securityLevel": self.security_level,
            "htmlLabels": False,
            "flowchart": {"htmlLabels": False},
        }


_engine_config: EngineConfig | None = None


def configure_engine(config: EngineConfig | None = None) -> EngineConfig:
    """
    Create the process-wide engine configuration.

    Calling again with an equal configuration returns the existing one.

    Args:
        config: Configuration to install (defaults to EngineConfig())

    Returns:
        EngineConfig: The installed configuration

    Raises:
        RuntimeError: If a different configuration is already installed
    """
    global _engine_config
    config = config or EngineConfig()
    if _engine_config is None:
        _engine_config = config
        logger.info(
            f"{__name__}:configure_engine - theme={config.theme}, "
            f"security_level={config.security_level}"
        )
    elif _engine_config != config:
        raise RuntimeError("Diagram engine is already configured with different settings")
    return _engine_config


def get_engine_config() -> EngineConfig:
    """
    Get the process-wide engine configuration.

    Raises:
        RuntimeError: If configure_engine() has not been called
    """
    if _engine_config is None:
        raise RuntimeError("Diagram engine is not configured; call configure_engine() at startup")
    return _engine_config


def detect_diagram_type(text: str) -> str | None:
    """
    Return the diagram type keyword of `text`, or None.

    Skips blank lines, `%%` comments/directives and a leading YAML front-matter block.
    """
    lines = text.splitlines()
    index = 0
    if lines and lines[0].strip() == "---":
        index = 1
        while index < len(lines) and lines[index].strip() != "---":
            index += 1
        index += 1
    for line in lines[index:]:
        stripped = line.strip()
        if not stripped or stripped.startswith("%%"):
            continue
        match = _KEYWORD_RE.match(stripped)
        return match.group(0) if match else None
    return None


def extract_cli_error(stderr: str) -> str | None:
    """
    Pull the engine's error message out of mmdc stderr output.

    Keeps the text after "Error: " up to the first stack frame.
    """
    lines = stderr.splitlines()
    for i, line in enumerate(lines):
        if "Error:" not in line:
            continue
        message_lines = [line.split("Error:", 1)[1].strip()]
        for follow in lines[i + 1:]:
            if not follow.strip() or _STACK_FRAME_RE.match(follow):
                break
            message_lines.append(follow.rstrip())
        message = "\n".join(message_lines).strip()
        return message or None
    return None


class DiagramEngine(Protocol):
    """Opaque diagram engine: errors carry a human readable `.message`."""

    async def parse(self, text: str) -> None:
        """Raise if `text` is not a valid diagram description."""
        ...

    async def render(self, diagram_id: str, text: str) -> str:
        """Render `text` to SVG markup using `diagram_id` as the SVG element id."""
        ...


class MermaidCliEngine:
    """Diagram engine backed by the Mermaid CLI (`mmdc`)."""

    def __init__(
        self,
        config: EngineConfig,
        mmdc_path: str = "mmdc",
        timeout_seconds: float = 30.0,
    ) -> None:
        """
        Initialize Mermaid CLI engine.

        Args:
            config: Process-wide engine configuration
            mmdc_path: Path or command name of the mmdc executable
            timeout_seconds: Maximum duration of one render
        """
        self._config = config
        self._mmdc_path = mmdc_path
        self._timeout = timeout_seconds

    @property
    def config(self) -> EngineConfig:
        return self._config

    def is_available(self) -> bool:
        """Whether the mmdc executable can be resolved."""
        return shutil.which(self._mmdc_path) is not None

    async def parse(self, text: str) -> None:
        if detect_diagram_type(text) is None:
            raise DiagramSyntaxError(
                f"No diagram type detected matching given configuration for text: {text}"
            )

    async def render(self, diagram_id: str, text: str) -> str:
        with tempfile.TemporaryDirectory(prefix="mermaid-render-") as tmp:
            workdir = Path(tmp)
            source = workdir / f"{diagram_id}.mmd"
            target = workdir / f"{diagram_id}.svg"
            config_file = workdir / "mermaid-config.json"
            source.write_text(text, encoding="utf-8")
            config_file.write_text(json.dumps(self._config.to_mermaid_config()), encoding="utf-8")

            cmd = [
                self._mmdc_path,
                "-i", str(source),
                "-o", str(target),
                "-c", str(config_file),
                "-t", self._config.theme,
                "-I", diagram_id,
                "-q",
            ]
            logger.debug(f"{__name__}:render - START id={diagram_id}, text_len={len(text)}")
            try:
                proc = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except FileNotFoundError as e:
                raise RendererUnavailableError(
                    f"Mermaid CLI not found: {self._mmdc_path}",
                    details={"mmdc_path": self._mmdc_path},
                ) from e

            try:
                _, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
            except asyncio.TimeoutError as e:
                proc.kill()
                await proc.wait()
                raise RendererUnavailableError(
                    f"Rendering timed out after {self._timeout:g}s",
                    details={"diagram_id": diagram_id},
                ) from e

            error_text = stderr.decode("utf-8", errors="replace")
            if proc.returncode != 0:
                message = extract_cli_error(error_text)
                line_match = _LINE_RE.search(message or "")
                logger.debug(
                    f"{__name__}:render - FAILED id={diagram_id}, returncode={proc.returncode}"
                )
                raise DiagramSyntaxError(
                    message or "",
                    line=int(line_match.group(1)) if line_match else None,
                )
            if not target.exists():
                raise RendererUnavailableError("Mermaid CLI finished but produced no SVG")

            markup = target.read_text(encoding="utf-8")
            logger.debug(f"{__name__}:render - END id={diagram_id}, svg_len={len(markup)}")
            return markup
