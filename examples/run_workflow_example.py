"""Example: run a YAML workflow with stub providers and print every lifecycle event."""
from agentflow.log import configure_logging
from agentflow.providers.echo import EchoProvider
from agentflow.workflow.compiler import load_workflow_file
from agentflow.workflow.events import EventLog
from agentflow.workflow.executor import WorkflowEngine


def main():
    configure_logging()
    workflow = load_workflow_file("examples/workflows/summarize_and_translate.yaml")

    engine = WorkflowEngine(providers={
        "claude": EchoProvider("claude", transform=str.upper),
        "gpt": EchoProvider("gpt", transform=lambda text: f"[fr] {text}"),
    })
    log = EventLog()
    engine.events.subscribe(log)
    engine.events.subscribe(lambda event: print(f"{event.type:<17} {event.node_id or '':<10} {event.result or event.error or ''}"))

    result = engine.execute(workflow, "Workflows pass text from node to node.")
    print("Result:", result)
    print("Events seen:", len(log.events))


if __name__ == "__main__":
    main()
