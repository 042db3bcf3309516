"""
Typer ベースの CLI エントリポイント。
"""

from __future__ import annotations

import typer

from .commands import storage


def create_cli() -> typer.Typer:
    app = typer.Typer(help="localfs-storage CLI")
    app.add_typer(storage.app, name="storage")
    return app


def main() -> None:
    create_cli()()
