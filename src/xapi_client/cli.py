"""CLI entry point for the xAPI client."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import click
import httpx

from .client import LRSClient
from .core.config import Settings, load_settings
from .core.errors import StatementError, XAPIError
from .core.ids import generate_id
from .observability.logger import get_logger, new_send_id, setup_logging

log = get_logger(__name__)


def _read_statements(path: Path) -> dict[str, Any] | list[dict[str, Any]]:
    """Load one statement (JSON object) or a batch (JSON array) from *path*."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise StatementError(f"{path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise StatementError(f"{path} is not valid JSON: {exc}") from exc

    if isinstance(data, dict):
        return data
    if isinstance(data, list) and all(isinstance(s, dict) for s in data):
        return data
    raise StatementError(
        f"{path} must hold a statement object or an array of statement objects"
    )


async def _send(
    settings: Settings, data: dict[str, Any] | list[dict[str, Any]],
) -> Any:
    async with LRSClient.from_settings(settings) as client:
        if isinstance(data, list):
            return await client.send_statements(data)
        return await client.send_statement(data)


@click.group()
def main() -> None:
    """xAPI statement client."""


@main.command()
@click.argument(
    "statements_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--config", default=None, help="TOML config file path")
@click.option("--endpoint", default=None, help="LRS endpoint URL override")
@click.option("--username", default=None, help="LRS username/key override")
@click.option("--password", default=None, help="LRS password/secret override")
@click.option(
    "--xapi-version", "xapi_version", default=None,
    help="X-Experience-API-Version header override",
)
def send(
    statements_file: Path,
    config: str | None,
    endpoint: str | None,
    username: str | None,
    password: str | None,
    xapi_version: str | None,
) -> None:
    """Send the statement(s) in STATEMENTS_FILE to the LRS."""
    lrs = {
        "endpoint": endpoint,
        "username": username,
        "password": password,
        "version": xapi_version,
    }
    overrides: dict[str, Any] = {}
    lrs = {k: v for k, v in lrs.items() if v is not None}
    if lrs:
        overrides["lrs"] = lrs

    try:
        settings = load_settings(config_path=config, overrides=overrides)
        setup_logging(
            settings.observability.log_level,
            settings.observability.log_format,
        )
        new_send_id()

        data = _read_statements(statements_file)
        count = len(data) if isinstance(data, list) else 1
        log.info("sending_statements", count=count, endpoint=settings.lrs.endpoint)

        result = asyncio.run(_send(settings, data))
    except (XAPIError, httpx.HTTPError) as exc:
        raise click.ClickException(str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"LRS returned a non-JSON response: {exc}") from exc

    click.echo(json.dumps(result, indent=2))


@main.command("new-id")
def new_id() -> None:
    """Print a freshly generated statement ID."""
    click.echo(generate_id())
