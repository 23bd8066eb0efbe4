"""CLI context shared between commands."""

import logging

import click

from ..config import Settings


class PQContext:
    def __init__(self):
        self.settings: Settings = Settings()


pass_context = click.make_pass_decorator(PQContext, ensure=True)


def configure_logging(level: str = "WARNING") -> None:
    """Send placequery log records to stderr at ``level``."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("placequery").setLevel(level)
