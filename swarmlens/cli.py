from __future__ import annotations

import argparse
import dataclasses
import json
import sys

import requests

from .server import configure_logging, serve
from .settings import settings


def _print(obj) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def _fetch(base: str, path: str) -> int:
    try:
        r = requests.get(f"{base}{path}", timeout=30)
    except requests.exceptions.RequestException as e:
        print(f"Cannot reach {base}: {e}", file=sys.stderr)
        return 1
    try:
        body = r.json()
    except ValueError:
        body = r.text
    if not r.ok:
        print(f"HTTP {r.status_code}", file=sys.stderr)
    _print(body)
    return 0 if r.ok else 1


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Read-only HTTP facade over the Docker engine API")
    sub = p.add_subparsers(dest="cmd", required=True)

    s_serve = sub.add_parser("serve", help="Run the HTTP facade")
    s_serve.add_argument("--host", default=settings.host)
    s_serve.add_argument("--port", type=int, default=settings.port)
    s_serve.add_argument("--docker-api-version", default=settings.docker_api_version)
    s_serve.add_argument("--log-level", default=settings.log_level)

    default_api = f"http://localhost:{settings.port}"
    for name, help_text in (("containers", "List running containers"), ("services", "Summarize swarm services")):
        s = sub.add_parser(name, help=help_text)
        s.add_argument("--api", default=default_api, help="Facade base URL")

    args = p.parse_args(argv)

    if args.cmd == "serve":
        configure_logging(args.log_level)
        cfg = dataclasses.replace(
            settings,
            host=args.host,
            port=args.port,
            docker_api_version=args.docker_api_version,
            log_level=args.log_level,
        )
        return serve(cfg)

    return _fetch(args.api.rstrip("/"), f"/{args.cmd}")


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
