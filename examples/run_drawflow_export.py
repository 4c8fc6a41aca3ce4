"""Example: import a Drawflow editor export, store it, and run it."""
import tempfile

from agentflow.providers.echo import EchoProvider
from agentflow.workflow.executor import WorkflowEngine
from agentflow.workflow.storage import WorkflowStorage

DRAWFLOW_EXPORT = {
    "drawflow": {
        "Home": {
            "data": {
                "1": {
                    "id": 1, "name": "input", "class": "User Input", "pos_x": 100, "pos_y": 200,
                    "data": {"label": "Question"},
                    "inputs": {},
                    "outputs": {"output_1": {"connections": [{"node": "2", "output": "input_1"}]}},
                },
                "2": {
                    "id": 2, "name": "agent", "class": "Shouter", "pos_x": 400, "pos_y": 200,
                    "data": {"provider": "claude", "systemPrompt": "Answer loudly."},
                    "inputs": {"input_1": {"connections": [{"node": "1", "input": "output_1"}]}},
                    "outputs": {"output_1": {"connections": [{"node": "3", "output": "input_1"}]}},
                },
                "3": {
                    "id": 3, "name": "output", "class": "Response", "pos_x": 700, "pos_y": 200,
                    "data": {"label": "Answer"},
                    "inputs": {"input_1": {"connections": [{"node": "2", "input": "output_1"}]}},
                    "outputs": {},
                },
            }
        }
    }
}


def main():
    with tempfile.TemporaryDirectory() as tmp:
        storage = WorkflowStorage(tmp)
        workflow = storage.save_from_drawflow(DRAWFLOW_EXPORT, "shout", "Shout back")

        engine = WorkflowEngine(providers={"claude": EchoProvider("claude", transform=str.upper)})
        result = engine.execute(storage.get_workflow(workflow.id), "hello there")
        print("Result:", result)
        print("Node results:", engine.get_execution_state().node_results)


if __name__ == "__main__":
    main()
