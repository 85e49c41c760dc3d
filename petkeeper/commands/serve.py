"""``petkeeper serve`` — run the inventory API with uvicorn."""
from __future__ import annotations


def register(subparsers) -> None:
    p = subparsers.add_parser("serve", help="Run the inventory API")
    p.add_argument("--host", type=str, default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    p.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    p.add_argument("--reload", action="store_true", help="Reload on code changes")
    p.set_defaults(func=run)


def run(args) -> int:
    import uvicorn

    print(f"  Starting inventory API on {args.host}:{args.port} ...")
    uvicorn.run("backend.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0
