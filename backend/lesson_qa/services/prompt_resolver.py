# lesson_qa/services/prompt_resolver.py
"""
prompt_resolver.py
- Purpose: Pick the review instruction for a QA mode.
- Precedence: configuration store -> active qa_versions record -> built-in
  default. The first lookup that returns something wins.
- Always succeeds: a failing store is logged and skipped, and the built-in
  default exists for every mode.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from lesson_qa.constants.qa import QAMode
from lesson_qa.llm.prompts.registry import get_default_prompt

logger = logging.getLogger("lesson_qa.prompt_resolver")

CONFIG_KEY_PREFIX = "ai-qa-runner-"


@dataclass(frozen=True)
class ResolvedPrompt:
    instruction: str
    version_tag: str
    source: str  # "config" | "qa_versions" | "default"


def config_key(mode: QAMode) -> str:
    return f"{CONFIG_KEY_PREFIX}{mode.value}"


class PromptResolver:
    def __init__(self, config_repo=None, version_repo=None):
        # Repos are optional so the resolver also works without a database
        self.config_repo = config_repo
        self.version_repo = version_repo

    def _from_config(self, mode: QAMode) -> ResolvedPrompt | None:
        if self.config_repo is None:
            return None
        cfg = self.config_repo.get_by_key(config_key(mode))
        if not cfg or not (cfg.instruction or "").strip():
            return None
        tag = f"config-{mode.value}-locked" if cfg.is_locked else f"config-{mode.value}"
        return ResolvedPrompt(instruction=cfg.instruction, version_tag=tag, source="config")

    def _from_versions(self, mode: QAMode) -> ResolvedPrompt | None:
        if self.version_repo is None:
            return None
        version = self.version_repo.get_active(mode.value)
        if not version or not (version.prompt_template or "").strip():
            return None
        return ResolvedPrompt(instruction=version.prompt_template, version_tag=version.version_tag, source="qa_versions")

    def _lookups(self) -> list[tuple[str, Callable[[QAMode], ResolvedPrompt | None]]]:
        return [("config", self._from_config), ("qa_versions", self._from_versions)]

    def resolve(self, mode: QAMode | str) -> ResolvedPrompt:
        mode = QAMode(mode)
        for name, lookup in self._lookups():
            try:
                found = lookup(mode)
            except Exception as e:
                logger.warning("prompt.lookup_failed", extra={"source": name, "error": str(e)})
                continue
            if found:
                logger.info("prompt.resolved", extra={"source": found.source, "prompt_version": found.version_tag})
                return found

        tmpl = get_default_prompt(mode)
        logger.info("prompt.resolved", extra={"source": "default", "prompt_version": tmpl.version})
        return ResolvedPrompt(instruction=tmpl.template, version_tag=tmpl.version, source="default")
