"""Main module entrypoint for local runtime execution.

The `api` command validates startup configuration and launches the FastAPI
service. The `execute` command runs one batch of node items read as a JSON
array from a file or stdin and prints the output records.
"""

import argparse
import json
import sys
from typing import Any

import uvicorn

from canias_ws.adapters import CaniasOperationError
from canias_ws.bootstrap import bootstrap_create_application, bootstrap_create_node_executor
from canias_ws.config import config_load_settings


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="CANIAS web service connector runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "execute"),
        help="Runtime command: `api` starts server, `execute` runs one batch of node items",
        type=str,
    )
    argument_parser.add_argument(
        "--input",
        dest="input_path",
        default="-",
        type=str,
        help="JSON file with an array of item parameters for `execute`; `-` reads stdin",
    )
    parsed_arguments = argument_parser.parse_args()

    if parsed_arguments.command == "execute":
        items = main_read_items(parsed_arguments.input_path)
        node_executor = bootstrap_create_node_executor()
        try:
            output_items = node_executor.job_execute_items(items)
        except CaniasOperationError as error:
            print(json.dumps(error.operation_error_record(), indent=2), file=sys.stderr)
            raise SystemExit(1) from error

        print(json.dumps([item.json for item in output_items], indent=2, default=str))
        if any(item.error is not None for item in output_items):
            raise SystemExit(1)
        return

    settings = config_load_settings()
    application = bootstrap_create_application()
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_read_items(input_path: str) -> list[dict[str, Any]]:
    """Read node items from a JSON file or stdin.

    Args:
        input_path: File path, or `-` for stdin.

    Returns:
        list[dict[str, Any]]: Item parameter mappings; a single object becomes one item.

    Raises:
        SystemExit: Raised when the input is not a JSON object or array of objects.
    """

    if input_path == "-":
        payload = json.load(sys.stdin)
    else:
        with open(input_path, encoding="utf-8") as input_file:
            payload = json.load(input_file)

    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise SystemExit("input must be a JSON object or an array of objects")
    return payload


if __name__ == "__main__":
    main()
