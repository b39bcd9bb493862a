"""
main.py
Entry point for the Laytime & Demurrage service.

Usage:
  python main.py api
  python main.py api --port 8080 --no-metrics
"""
import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path when running directly
sys.path.insert(0, str(Path(__file__).parent))


# ── API mode ──────────────────────────────────────────────────────────────────

def run_api(host: str = None, port: int = None, metrics: bool = True, reload: bool = False) -> None:
    import uvicorn
    from config.settings import settings
    from monitoring import start_metrics_server

    if metrics:
        start_metrics_server(settings.metrics_port)
    uvicorn.run(
        "api.app:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Laytime & Demurrage service")
    sub = parser.add_subparsers(dest="command")

    api = sub.add_parser("api", help="Serve the HTTP API")
    api.add_argument("--host", default=None)
    api.add_argument("--port", type=int, default=None)
    api.add_argument("--no-metrics", action="store_true", help="Do not start the Prometheus endpoint")
    api.add_argument("--reload", action="store_true")
    return parser


if __name__ == "__main__":
    args = build_parser().parse_args()
    if args.command in (None, "api"):
        run_api(
            host=getattr(args, "host", None),
            port=getattr(args, "port", None),
            metrics=not getattr(args, "no_metrics", False),
            reload=getattr(args, "reload", False),
        )
