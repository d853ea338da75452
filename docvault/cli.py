"""Command line entry for DocVault."""

from __future__ import annotations

import argparse

import uvicorn

from docvault.api.main import app


def run_server(host: str = "0.0.0.0", port: int = 5000) -> None:
    uvicorn.run(app, host=host, port=port)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the DocVault API server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=5000)
    args = parser.parse_args()
    run_server(args.host, args.port)


if __name__ == "__main__":
    main()
