"""Command line entry point.

    python -m service_host workers.images workers.text:SERVICES --port 8080

Each target is ``module`` or ``module:attribute``. The attribute (default
``services``) is either an iterable of service definitions or a callable
taking the host, such as a module-level ``register(host)`` function.
"""

import argparse
import dataclasses
import importlib
import sys
from typing import Any

from service_host.config import get_settings
from service_host.errors import ServiceHostError
from service_host.host import Host


def load_target(host: Host, target: str) -> None:
    """Import one target and register its services on ``host``."""
    module_name, _, attribute = target.partition(":")
    module = importlib.import_module(module_name)

    if attribute:
        obj: Any = getattr(module, attribute)
    elif hasattr(module, "register"):
        obj = module.register
    else:
        obj = getattr(module, "services")

    if callable(obj):
        obj(host)
    else:
        for definition in obj:
            host.add_service(definition)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="service_host", description="Serve named services over HTTP.")
    parser.add_argument("targets", nargs="+", help="module[:attribute] providing services")
    parser.add_argument("--address", help="listening address (HOST_ADDRESS)")
    parser.add_argument("--port", type=int, help="listening port (HOST_PORT)")
    parser.add_argument("--auth-token", help="required X-Auth-Token value (HOST_AUTH_TOKEN)")
    parser.add_argument("--cache-ttl", type=float, help="default cache lifetime in seconds (SERVICE_CACHE_TTL)")
    parser.add_argument("--silent", action="store_true", default=None, help="suppress request error logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {
        field: value
        for field, value in (
            ("address", args.address),
            ("port", args.port),
            ("auth_token", args.auth_token),
            ("cache_ttl", args.cache_ttl),
            ("silent", args.silent),
        )
        if value is not None
    }

    try:
        settings = dataclasses.replace(get_settings(), **overrides)
        host = Host(settings)
        for target in args.targets:
            load_target(host, target)
    except (ServiceHostError, ValueError) as e:
        print(f"service_host: {e}", file=sys.stderr)
        return 1

    host.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
