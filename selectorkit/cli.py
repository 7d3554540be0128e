# selectorkit/cli.py
from __future__ import annotations

"""Command-line interface
------------------------
Inspect the selector registry, render queries and try them against static
HTML files. Thin wrapper around the registry, SelectorQuery and LxmlBackend.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from selectorkit.backends.lxml_backend import LxmlBackend
from selectorkit.core.query import SelectorQuery
from selectorkit.selectors.builtin import get_registry
from selectorkit.selectors.errors import SelectorError
from selectorkit.utils.config import get_settings
from selectorkit.utils.logger import bind, set_log_level


# -------- helpers --------


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False, default=str))


def _parse_options(pairs: Tuple[str, ...]) -> Dict[str, Any]:
    """`key=value` pairs; values are read as JSON when possible (true, 3, ["a","b"])."""
    out: Dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--option")
        key, raw = pair.split("=", 1)
        try:
            out[key.strip()] = json.loads(raw)
        except json.JSONDecodeError:
            out[key.strip()] = raw
    return out


def _build_query(selector: str, locator: Optional[str], options: Tuple[str, ...], exact: Optional[bool]) -> SelectorQuery:
    opts = _parse_options(options)
    if exact is not None:
        opts["exact"] = exact
    return SelectorQuery(None if selector == "auto" else selector, locator, opts)


_option_opt = click.option(
    "-o", "--option", "options", multiple=True, metavar="KEY=VALUE",
    help="Query option (repeatable), e.g. -o disabled=true -o class='[\"a\",\"b\"]'",
)
_exact_opt = click.option("--exact/--no-exact", default=None, help="Override EXACT from settings")


# -------- CLI root --------


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
@click.version_option(package_name="selectorkit")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]):
    _ = get_settings()
    if log_level:
        set_log_level(log_level.upper())
    bind(command=ctx.invoked_subcommand)


# -------- commands --------


@cli.command("config")
def cmd_config():
    """Print effective configuration (after .env & env vars)."""
    s = get_settings()
    _echo_json(s.model_dump(mode="json"))


@cli.command("list")
def cmd_list():
    """List registered selectors with their format and filters."""
    registry = get_registry()
    click.echo(f"Found {len(registry)} selector(s):\n")
    for name, sel in registry.all().items():
        filters = ", ".join(sel.custom_filters) or "-"
        label = f" ({sel.label})" if sel.label else ""
        click.echo(f" - {name}{label}  [{sel.format or 'no format'}]  filters: {filters}")


@cli.command("expr")
@click.argument("selector")
@click.argument("locator", required=False)
@_option_opt
@_exact_opt
def cmd_expr(selector: str, locator: Optional[str], options: Tuple[str, ...], exact: Optional[bool]):
    """Print the query SELECTOR builds for LOCATOR ("auto" detects the selector)."""
    try:
        query = _build_query(selector, locator, options, exact)
    except SelectorError as e:
        click.echo(f"ERR {e}")
        sys.exit(2)
    if query.expression is None:
        click.echo(f"ERR selector {query.selector.name!r} has no expression")
        sys.exit(1)
    click.echo(query.css() if query.selector.format == "css" else query.xpath())


@cli.command("find")
@click.argument("html_file", type=click.Path(dir_okay=False, exists=True))
@click.argument("selector")
@click.argument("locator", required=False)
@_option_opt
@_exact_opt
@click.option("--all", "find_all", is_flag=True, default=False, help="List every match instead of exactly one")
def cmd_find(
    html_file: str,
    selector: str,
    locator: Optional[str],
    options: Tuple[str, ...],
    exact: Optional[bool],
    find_all: bool,
):
    """Resolve SELECTOR/LOCATOR against a static HTML file."""
    backend = LxmlBackend.from_file(Path(html_file))
    try:
        query = _build_query(selector, locator, options, exact)
        nodes: List[Any] = query.resolve_for(backend) if find_all else [query.find(backend)]
    except SelectorError as e:
        click.echo(f"ERR {e}")
        sys.exit(1)

    if not nodes:
        click.echo(f"ERR Unable to find {query.description}")
        sys.exit(1)
    for node in nodes:
        attrs = " ".join(f'{k}="{v}"' for k, v in node.element.attrib.items())
        click.echo(f"OK  <{node.tag_name}{' ' + attrs if attrs else ''}>")


def main() -> None:
    cli(prog_name="selectorkit")


if __name__ == "__main__":
    main()
