# lesson_qa/services/connector.py
"""
connector.py
- Purpose: Hand-off point for pushing a finished QA run to an external
  project tool.
- Stub: no specific tool is integrated. It logs the request and returns a
  synthetic external id.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from lesson_qa.schemas.qa_run import QARun

logger = logging.getLogger("lesson_qa.connector")


class ConnectorTarget(str, Enum):
    PROJECT_TOOL = "project-tool"


@dataclass(frozen=True)
class ConnectorResult:
    success: bool
    message: str
    external_id: str | None = None


def push_to_connector(target: ConnectorTarget | str, run: QARun) -> ConnectorResult:
    target = ConnectorTarget(target)
    logger.info(
        "connector.push_requested",
        extra={"target": target.value, "run_id": str(run.id), "verdict": run.verdict},
    )
    return ConnectorResult(
        success=True,
        message=f'Results queued for "{target.value}". Integration stub; no endpoint is configured.',
        external_id=f"stub-{run.id}",
    )
