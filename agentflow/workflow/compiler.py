""" Load a workflow document (YAML or JSON) into an AgentWorkflow. """
from pathlib import Path
from typing import Union

import yaml

from .errors import WorkflowFormatError
from .models import AgentWorkflow
from .schema import spec_to_workflow, validate_document


def load_workflow(text: str) -> AgentWorkflow:
    """
    Load a workflow from YAML text. JSON documents load too, being valid YAML.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise WorkflowFormatError(f"Could not parse workflow document: {e}")
    return spec_to_workflow(validate_document(data))


def load_workflow_file(path: Union[str, Path]) -> AgentWorkflow:
    return load_workflow(Path(path).read_text(encoding="utf-8"))
