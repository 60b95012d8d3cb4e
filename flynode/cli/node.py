"""Console entrypoint: run one node over stdin/stdout."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console

from flynode.config.loader import load_config
from flynode.config.schema import LOG_LEVELS
from flynode.node.errors import NodeError
from flynode.node.handler import Node
from flynode.node.ids import make_id_generator
from flynode.node.runtime import ReplyWriter, read_documents, serve

app = typer.Typer(name="flynode", help="Distributed-systems node speaking JSON over stdin/stdout")
console = Console(stderr=True)

_ID_POLICIES = ("random", "node_counter")
_ERROR_POLICIES = ("abort", "skip")


def _setup_logging(level: str) -> None:
    # stdout carries protocol traffic, logs go to stderr only
    logger.remove()
    logger.add(sys.stderr, level=level)


@app.callback()
def main() -> None:
    """flynode - single node message handling."""


@app.command("run")
def run(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file (default ~/.flynode/config.json)"),
    id_policy: Optional[str] = typer.Option(None, "--id-policy", help="Unique id policy: random | node_counter"),
    on_error: Optional[str] = typer.Option(None, "--on-error", help="On a bad input: abort | skip"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (stderr)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the random id policy"),
):
    """Read requests from stdin and write one reply per request to stdout."""
    cfg = load_config(config).node
    if id_policy is not None:
        if id_policy not in _ID_POLICIES:
            raise typer.BadParameter(f"must be one of: {', '.join(_ID_POLICIES)}", param_hint="--id-policy")
        cfg.id_policy = id_policy
    if on_error is not None:
        if on_error not in _ERROR_POLICIES:
            raise typer.BadParameter(f"must be one of: {', '.join(_ERROR_POLICIES)}", param_hint="--on-error")
        cfg.on_error = on_error
    if log_level is not None:
        if log_level.upper() not in LOG_LEVELS:
            raise typer.BadParameter(f"must be one of: {', '.join(LOG_LEVELS)}", param_hint="--log-level")
        cfg.log_level = log_level.upper()
    if seed is not None:
        cfg.seed = seed

    _setup_logging(cfg.log_level)
    node = Node(ids=make_id_generator(cfg.id_policy, seed=cfg.seed))
    logger.info(f"Starting node (id policy: {cfg.id_policy}, on error: {cfg.on_error})")

    try:
        sent = serve(node, read_documents(sys.stdin.buffer), ReplyWriter(sys.stdout.buffer), on_error=cfg.on_error)
    except NodeError as e:
        logger.error(f"{type(e).__name__}: {e}")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        console.print("\nStopping node...")
        raise typer.Exit(code=130)

    logger.info(f"Input closed after {sent} replies")


if __name__ == "__main__":
    app()
