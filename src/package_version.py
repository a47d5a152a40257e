"""package-version - MCP server reporting the latest stable package versions.

    Returns:
        int: Exit code
"""
import sys

from args import parse_args
from cli_mcp import run_mcp_server
from constants import ExitCodes


def main(argv=None) -> int:
    """Parse arguments and serve MCP over stdio until the client disconnects."""
    args = parse_args(argv)
    run_mcp_server(args)
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
