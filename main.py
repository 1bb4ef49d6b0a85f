import argparse
import sys
import traceback
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

# Load .env before reading settings
env_path = Path(__file__).resolve().parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def _unhandled_exception(exc_type, exc_value, exc_tb):
    """Print unhandled exceptions before the process exits."""
    if exc_type is KeyboardInterrupt:
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    msg = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
    print("Unhandled exception:\n" + msg, file=sys.stderr, flush=True)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="AuthApp authentication service")
    parser.add_argument("--settings", default=None, help="Path to settings.yaml (defaults to AUTHAPP_SETTINGS)")
    subparsers = parser.add_subparsers(dest="command")
    parser.set_defaults(command="serve", host=None, port=None)

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind address (defaults to server.host)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (defaults to server.port)")

    subparsers.add_parser("tui", help="Launch the terminal client")

    return parser.parse_args(argv)


def _serve(settings_path: Optional[str], host: Optional[str], port: Optional[int]) -> None:
    import uvicorn

    from authapp.app import AuthApp
    from web.main import create_app

    auth_app = AuthApp(settings_path=Path(settings_path) if settings_path else None)
    service = auth_app.initialize()
    settings = auth_app.settings

    host = host or settings.server.host
    port = port or settings.server.port
    print(f"Starting {settings.app.name} ({settings.app.environment})")
    print(f"API available at http://{host}:{port}")

    uvicorn.run(create_app(service), host=host, port=port, log_level="info")


def _run_tui(settings_path: Optional[str]) -> None:
    from authapp.app import AuthApp
    from ui.dashboard import main as dashboard_main

    auth_app = AuthApp(settings_path=Path(settings_path) if settings_path else None)
    dashboard_main(auth_app.initialize(log_to_console=False))


def main(argv: Optional[Sequence[str]] = None) -> int:
    sys.excepthook = _unhandled_exception
    args = _parse_args(argv)

    try:
        if args.command == "serve":
            _serve(args.settings, args.host, args.port)
        elif args.command == "tui":
            _run_tui(args.settings)
    except KeyboardInterrupt:
        print("\nShutdown complete.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
