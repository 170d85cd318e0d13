from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from typing import Any

from pydantic import BaseModel

from pokeapi_endpoints.api_client import ApiDecodeError, ApiTransportError, ApiUpstreamError
from pokeapi_endpoints.config import AppConfig
from pokeapi_endpoints.registry import UNNAMED_RESOURCES, EndpointRegistry


def _parse_param(value: str) -> int | str:
    return int(value) if value.isdecimal() else value


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


async def _run(args: argparse.Namespace, registry: EndpointRegistry) -> Any:
    endpoint = registry.endpoint(args.category)
    if args.param is not None:
        return await endpoint.resolve(_parse_param(args.param))  # type: ignore[arg-type]
    if args.all:
        return await endpoint.list_all()
    return await endpoint.list(args.limit, args.offset)


def main(argv: list[str] | None = None) -> None:
    config = AppConfig.from_env()

    parser = argparse.ArgumentParser(prog="pokeapi-lookup")
    parser.add_argument("category", help="Resource category, e.g. berry or pokemon.")
    parser.add_argument("param", nargs="?", help="Resource id or name. Omit to list the category.")
    parser.add_argument("--limit", type=int, default=20)
    parser.add_argument("--offset", type=int, default=0)
    parser.add_argument("--all", action="store_true", help="List every resource in the category.")
    parser.add_argument("--base-uri", default=config.base_uri)
    parser.add_argument("--log-level", default=config.log_level)
    args = parser.parse_args(argv)

    category = args.category.strip().lower().replace("_", "-")
    if args.param is not None and not args.param.isdecimal() and category in UNNAMED_RESOURCES:
        parser.error(f"{category} resources can only be looked up by id")

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = replace(config, base_uri=args.base_uri.rstrip("/"))

    async def _main() -> Any:
        registry = EndpointRegistry.from_config(config)
        try:
            return await _run(args, registry)
        finally:
            await registry.aclose()

    try:
        result = asyncio.run(_main())
    except ApiUpstreamError as exc:
        print(f"Lookup failed: HTTP {exc.status_code} {exc.body}", file=sys.stderr)
        raise SystemExit(1)
    except (ApiTransportError, ApiDecodeError) as exc:
        print(f"Lookup failed: {exc}", file=sys.stderr)
        raise SystemExit(1)

    print(json.dumps(_jsonable(result), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
