"""CLI entry point: python -m binomialtheory.mcp [theory_module]"""

from __future__ import annotations

import sys


def main() -> None:
    module_path = sys.argv[1] if len(sys.argv) > 1 else None

    # Redirect stdout to stderr during module loading in case define_theory() prints
    real_stdout = sys.stdout
    sys.stdout = sys.stderr
    try:
        from binomialtheory.cli import load_theory

        config = load_theory(module_path)
    finally:
        sys.stdout = real_stdout

    from binomialtheory.mcp.server import create_server

    server = create_server(config)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
