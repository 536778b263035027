from __future__ import annotations

import argparse
import os
from collections.abc import Sequence
from pathlib import Path

import uvicorn

MANIFEST = Path(__file__).resolve().parent.parent / "frontend" / "dist" / ".vite" / "manifest.json"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the Vite bridge demo application.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--manifest", default=str(MANIFEST), help="Path to Vite's manifest.json")
    parser.add_argument("--dev-server", default=None, help="Vite dev server URL")
    parser.add_argument("--reload", action="store_true")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)

    # The application factory reads its configuration from the environment.
    os.environ.setdefault("VITE_MANIFEST_PATH", args.manifest)
    if args.dev_server:
        os.environ["VITE_SERVER_HOST"] = args.dev_server

    if not Path(os.environ["VITE_MANIFEST_PATH"]).exists():
        print("[run-server] Manifest not found; assets will only resolve while the Vite dev server runs.")

    uvicorn.run(
        "vite_bridge.web.main:create_application",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
