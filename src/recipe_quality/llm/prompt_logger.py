"""
Recipe Quality - Prompt Logger.

Writes each generation request and its result to a markdown file under
prompt_logs/<session>/ so rewrites can be reviewed after a run.

Off by default. Turned on by RECIPE_QUALITY_LOG_PROMPTS (read through
QualitySettings) or for one process by the --log-prompts CLI flag.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

LOG_DIR = Path("prompt_logs")

# None = follow settings; True/False = forced by enable_prompt_logging()
_override: bool | None = None

_session_dir: Path | None = None
_call_counter: int = 0


def enable_prompt_logging(enabled: bool = True) -> None:
    """Force prompt logging on or off for this process."""
    global _override
    _override = enabled


def _logging_enabled() -> bool:
    if _override is not None:
        return _override

    from recipe_quality.config import settings

    return settings.recipe_quality_log_prompts


def _session_path() -> Path:
    global _session_dir
    if _session_dir is None:
        _session_dir = LOG_DIR / datetime.now().strftime("%Y%m%d_%H%M%S")
    _session_dir.mkdir(parents=True, exist_ok=True)
    return _session_dir


def _render_result(response: Any, error: str | None) -> str:
    if error:
        return f"**ERROR:** {error}\n"
    if response is None:
        return "(No response)\n"

    payload = response.model_dump() if hasattr(response, "model_dump") else response
    return f"```json\n{json.dumps(payload, indent=2, default=str)}\n```\n"


def log_prompt(
    *,
    node: str,
    model: str,
    system_prompt: str,
    user_prompt: str,
    response_model: str,
    response: Any = None,
    error: str | None = None,
) -> Path | None:
    """
    Record one generation call.

    Returns:
        Path to the written file, or None when logging is off
    """
    if not _logging_enabled():
        return None

    global _call_counter
    _call_counter += 1

    sections = [
        f"# {node} call {_call_counter}",
        f"- time: {datetime.now().isoformat()}\n- model: {model}\n- response model: {response_model}",
        f"## System\n\n```\n{system_prompt}\n```",
        f"## User\n\n```\n{user_prompt}\n```",
        f"## Result\n\n{_render_result(response, error)}",
    ]

    filepath = _session_path() / f"{_call_counter:02d}_{node}.md"
    filepath.write_text("\n\n".join(sections), encoding="utf-8")
    return filepath


def get_session_log_dir() -> Path | None:
    """Current session's log directory, if logging is on."""
    if not _logging_enabled():
        return None
    return _session_path()


def reset_session() -> None:
    """Forget the session directory, counter and any override."""
    global _session_dir, _call_counter, _override
    _session_dir = None
    _call_counter = 0
    _override = None
