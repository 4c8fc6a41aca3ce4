""" Example: export a YAML workflow to Drawflow JSON for the visual editor. """
from pathlib import Path

from agentflow.integrations.drawflow.drawflow_export import workflow_file_to_drawflow_json


def main():
    workflow_path = "examples/workflows/summarize_and_translate.yaml"
    out_json_path = "summarize_and_translate_drawflow.json"
    workflow_file_to_drawflow_json(Path(workflow_path), Path(out_json_path))
    print(f"Wrote Drawflow JSON to: {out_json_path}")


if __name__ == '__main__':
    main()
