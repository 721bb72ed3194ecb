import argparse
import sys
from pathlib import Path

import uvicorn

BACKEND_DIR = Path(__file__).resolve().parent / "backend"
sys.path.insert(0, str(BACKEND_DIR))

from shared.config import config  # noqa: E402

SERVICES = {
    "subtitle-sync": "services.subtitle_sync.app:app",
}

def main():
    parser = argparse.ArgumentParser(description="Bootloader for the subtitle sync FastAPI service.")
    parser.add_argument("service", nargs="?", default="subtitle-sync", choices=SERVICES.keys(), help="Service to start")
    parser.add_argument("--host", default=config.get("host", "0.0.0.0"), help="Host to bind")
    parser.add_argument("--port", type=int, default=config.get("port", 3000), help="Port to bind")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (dev mode)")
    args = parser.parse_args()

    app_path = SERVICES[args.service]
    print(f"[BOOTLOADER] Starting {args.service} on {args.host}:{args.port} ...")
    uvicorn.run(
        app_path,
        host=args.host,
        port=args.port,
        reload=args.reload,
        app_dir=str(BACKEND_DIR),
        log_level=config.get("log_level", "INFO").lower(),
    )

if __name__ == "__main__":
    main()
