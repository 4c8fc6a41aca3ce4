"""
Workflow engine: runs an AgentWorkflow from its Input node to its Output node.

Nodes are dispatched one at a time in dependency order. Every run gets its own
ExecutionState, and progress is reported as WorkflowEvent values on the
engine's EventChannel:

    nodeComplete(input) -> [nodeStart -> nodeComplete | nodeError]* -> workflowComplete | workflowError
"""
import logging
import threading
from typing import Dict, List, Optional, Tuple

from ..providers.registry import as_registry
from .context import ExecutionContext
from .errors import WorkflowCancelledError, WorkflowError, WorkflowValidationError
from .events import EventChannel
from .factory import make_agent, supported_node_types
from .models import (
    COMPLETED, ERROR, INPUT, NODE_COMPLETE, NODE_ERROR, NODE_START, OUTPUT,
    STOPPED_BY_USER, WORKFLOW_COMPLETE, WORKFLOW_ERROR,
    AgentWorkflow, ExecutionState, WorkflowEvent, WorkflowNode, now_ms,
)
from .ordering import execution_order

logger = logging.getLogger(__name__)


class WorkflowEngine:
    """
    Orchestrates one run per execute() call.

    Args:
        providers: provider capabilities keyed by identifier (a mapping or a ProviderRegistry)
        events: channel to report lifecycle events on; a private one is created if omitted
    """

    def __init__(self, providers=None, events: Optional[EventChannel] = None):
        self.providers = as_registry(providers)
        self.events = events if events is not None else EventChannel()
        self._latest: Optional[ExecutionState] = None
        self._lock = threading.Lock()

    def set_providers(self, providers) -> None:
        self.providers = as_registry(providers)

    def parse_drawflow_export(self, export, workflow_id: str, name: str) -> AgentWorkflow:
        from ..integrations.drawflow.drawflow_import import drawflow_to_workflow
        return drawflow_to_workflow(export, workflow_id, name)

    def execute(self, workflow: AgentWorkflow, input_message: str, *,
                state: Optional[ExecutionState] = None, dry_run: bool = False) -> str:
        """
        Run `workflow` with `input_message` as the Input node's result and
        return the Output node's result ("" if the Output node was never reached).

        Pass `state` to hold a handle on the run (e.g. to stop it from another
        thread); otherwise a fresh one is created.
        """
        input_node, output_node, order = _prepare(workflow)

        if state is None:
            state = ExecutionState(workflow_id=workflow.id)
        with self._lock:
            if state.is_cancelled:
                raise WorkflowCancelledError(state.error or STOPPED_BY_USER)
            if state.is_running:
                raise WorkflowError(f"Execution state of run {state.run_id} is already in use")
            state.begin(workflow.id)
            self._latest = state

        logger.info("Starting workflow execution: %s (run %s)", workflow.name, state.run_id)
        context = ExecutionContext(state=state, providers=self.providers, input_message=input_message)

        try:
            state.node_results[input_node.id] = make_agent(input_node).execute("", context)
            self._emit(state, NODE_COMPLETE, node_id=input_node.id, result=state.node_results[input_node.id])

            for node_id in order:
                if node_id == input_node.id:
                    continue
                node = workflow.get_node(node_id)
                if node is None:
                    logger.debug("Skipping unknown node id %s", node_id)
                    continue
                if state.is_cancelled:
                    raise WorkflowCancelledError(state.error or STOPPED_BY_USER)

                state.current_node_id = node_id
                self._emit(state, NODE_START, node_id=node_id)
                try:
                    result = self._dispatch(workflow, node, context, dry_run)
                except Exception as e:
                    self._emit(state, NODE_ERROR, node_id=node_id, error=str(e))
                    raise
                state.node_results[node_id] = result
                self._emit(state, NODE_COMPLETE, node_id=node_id, result=result)

            final_result = state.node_results.get(output_node.id) or ""
            # the last cancellation check and the transition are atomic with stop()
            with self._lock:
                if state.is_cancelled:
                    raise WorkflowCancelledError(state.error or STOPPED_BY_USER)
                state.status = COMPLETED
                state.completed_at = now_ms()
            self._emit(state, WORKFLOW_COMPLETE, result=final_result)
            logger.info("Workflow completed: %s", workflow.name)
            return final_result

        except Exception as e:
            message = str(e) or e.__class__.__name__
            with self._lock:
                already_reported = state.status == ERROR
                state.status = ERROR
                state.completed_at = now_ms()
                if not already_reported:
                    state.error = message
            if not already_reported:
                self._emit(state, WORKFLOW_ERROR, error=message)
            logger.error("Workflow error: %s", state.error)
            raise

    def _dispatch(self, workflow: AgentWorkflow, node: WorkflowNode, context: ExecutionContext,
                  dry_run: bool) -> str:
        node_input = gather_node_input(workflow, node.id, context.state.node_results)
        agent = make_agent(node)
        if dry_run:
            return agent.dry_run(node_input, context)
        return agent.execute(node_input, context)

    def stop(self, state: Optional[ExecutionState] = None) -> bool:
        """
        Mark a running run as stopped and signal it not to dispatch further nodes.

        Defaults to the most recently started run. A provider call already in
        flight is not interrupted. Returns True if a running run was stopped;
        a run that has not started or has already finished is left alone.
        """
        with self._lock:
            state = state if state is not None else self._latest
            if state is None or not state.is_running:
                return False
            state.status = ERROR
            state.error = STOPPED_BY_USER
            state.cancel_token.set()
        self._emit(state, WORKFLOW_ERROR, error=STOPPED_BY_USER)
        logger.info("Workflow run %s stopped by user", state.run_id)
        return True

    def get_execution_state(self) -> Optional[ExecutionState]:
        """ The most recently started run's state, or None before the first run. """
        return self._latest

    def _emit(self, state: ExecutionState, event_type: str, **kwargs) -> None:
        self.events.emit(WorkflowEvent(type=event_type, workflow_id=state.workflow_id,
                                       run_id=state.run_id, **kwargs))


def gather_node_input(workflow: AgentWorkflow, node_id: str, results: Dict[str, str]) -> str:
    """
    Combined input for a node: the results of its sources, in connection
    order, joined by a blank line. Unresolved or empty results are skipped and
    each source contributes once.
    """
    inputs: List[str] = []
    seen = set()
    for conn in workflow.connections:
        if conn.to_node_id != node_id or conn.from_node_id in seen:
            continue
        seen.add(conn.from_node_id)
        result = results.get(conn.from_node_id)
        if result:
            inputs.append(result)
    return "\n\n".join(inputs)


def validate_workflow(workflow: AgentWorkflow) -> Tuple[WorkflowNode, WorkflowNode]:
    """
    Check that the workflow can be run. Returns its (input, output) nodes.
    """
    input_node = _single_node(workflow, INPUT, "Input")
    output_node = _single_node(workflow, OUTPUT, "Output")

    known = supported_node_types()
    for node in workflow.nodes:
        if node.type not in known:
            raise WorkflowValidationError(f"Node {node.id} has unsupported type: {node.type}")
    return input_node, output_node


def _single_node(workflow: AgentWorkflow, node_type: str, label: str) -> WorkflowNode:
    matches = workflow.nodes_of_type(node_type)
    if not matches:
        raise WorkflowValidationError(f"Workflow must have an {label} node")
    if len(matches) > 1:
        raise WorkflowValidationError(
            f"Workflow must have exactly one {label} node, found {len(matches)}"
        )
    return matches[0]


def _prepare(workflow: AgentWorkflow):
    input_node, output_node = validate_workflow(workflow)
    return input_node, output_node, execution_order(workflow, input_node.id)
