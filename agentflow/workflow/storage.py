"""
File-backed workflow repository: one JSON document per workflow.

The engine never calls this; callers fetch a workflow here and hand it to
WorkflowEngine.execute().
"""
import json
import logging
import re
import secrets
import string
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from ..config import get_settings
from ..integrations.drawflow.drawflow_import import drawflow_to_workflow
from .errors import WorkflowFormatError
from .models import AgentWorkflow, now_ms
from .schema import spec_to_workflow, validate_document, workflow_to_document

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"[^A-Za-z0-9_.-]")


def generate_workflow_id() -> str:
    alphabet = string.ascii_lowercase + string.digits
    suffix = "".join(secrets.choice(alphabet) for _ in range(9))
    return f"workflow_{now_ms()}_{suffix}"


class WorkflowStorage:

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        self.directory = Path(directory if directory is not None else get_settings().storage_dir)
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.info("WorkflowStorage initialized at %s", self.directory)

    def _path(self, workflow_id: str) -> Path:
        return self.directory / f"{_SAFE_ID.sub('_', workflow_id)}.json"

    def list_workflows(self) -> List[AgentWorkflow]:
        """ All stored workflows, oldest first. """
        workflows = []
        for path in sorted(self.directory.glob("*.json")):
            try:
                workflows.append(self._read(path))
            except WorkflowFormatError as e:
                logger.warning("Skipping unreadable workflow file %s: %s", path, e)
        workflows.sort(key=lambda w: w.created_at)
        return workflows

    def get_workflow(self, workflow_id: str) -> Optional[AgentWorkflow]:
        path = self._path(workflow_id)
        if not path.exists():
            return None
        return self._read(path)

    def save_workflow(self, workflow: AgentWorkflow) -> None:
        """ Create or update. Stamps updated_at, and created_at on create. """
        path = self._path(workflow.id)
        workflow.updated_at = now_ms()
        if path.exists():
            logger.info("Updated workflow: %s", workflow.name)
        else:
            workflow.created_at = workflow.updated_at
            logger.info("Created workflow: %s", workflow.name)
        path.write_text(self.export_workflow(workflow), encoding="utf-8")

    def delete_workflow(self, workflow_id: str) -> bool:
        path = self._path(workflow_id)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Deleted workflow: %s", workflow_id)
        return True

    def export_workflow(self, workflow: AgentWorkflow) -> str:
        return json.dumps(workflow_to_document(workflow), indent=2)

    def import_workflow(self, text: str) -> AgentWorkflow:
        """
        Parse an exported workflow. The result gets a fresh id and timestamps
        so it never overwrites the workflow it was exported from.
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise WorkflowFormatError(f"Invalid workflow format: {e}")
        if not isinstance(raw, dict) or not raw.get("id") or not raw.get("name") or raw.get("nodes") is None:
            raise WorkflowFormatError("Invalid workflow format: missing required fields")

        workflow = spec_to_workflow(validate_document(raw))
        workflow.id = generate_workflow_id()
        workflow.created_at = workflow.updated_at = now_ms()
        return workflow

    def create_new_workflow(self, name: str) -> AgentWorkflow:
        now = now_ms()
        return AgentWorkflow(id=generate_workflow_id(), name=name, created_at=now, updated_at=now)

    def save_from_drawflow(self, export: Mapping[str, Any], workflow_id: str, name: str) -> AgentWorkflow:
        workflow = drawflow_to_workflow(export, workflow_id, name)
        self.save_workflow(workflow)
        return workflow

    def _read(self, path: Path) -> AgentWorkflow:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise WorkflowFormatError(f"Invalid workflow file {path.name}: {e}")
        return spec_to_workflow(validate_document(raw))
