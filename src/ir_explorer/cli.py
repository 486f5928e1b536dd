"""IR Explorer CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from ir_explorer import __version__
from ir_explorer.blocks import compute_line_spans
from ir_explorer.compiler import CompileResult, compile_source
from ir_explorer.config import ExplorerConfig, find_config, load_config
from ir_explorer.errors import ConfigError
from ir_explorer.ir_kinds import VALID_KINDS
from ir_explorer.reindent import reindent
from ir_explorer.render import render_dump, to_html_page


def _load() -> ExplorerConfig:
    """Load the nearest irx.toml, falling back to defaults."""
    try:
        return load_config(find_config(Path.cwd()))
    except FileNotFoundError:
        return ExplorerConfig()
    except ConfigError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)


@click.group()
@click.version_option(__version__, prog_name="ir-explorer")
@click.option("-v", "--verbose", count=True, help="Log more (repeat for debug).")
@click.pass_context
def main(ctx: click.Context, verbose: int) -> None:
    """Explore rustc IR dumps alongside the source that produced them."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = _load()


@main.command()
@click.option("--host", default=None, help="Interface to bind.")
@click.option("--port", type=int, default=None, help="Port to listen on.")
@click.pass_obj
def serve(config: ExplorerConfig, host: str | None, port: int | None) -> None:
    """Serve the compile/render HTTP API."""
    from ir_explorer.server import serve as run_server

    click.echo(
        f"listening on http://{host or config.server.host}:{port or config.server.port}"
    )
    run_server(config, host=host, port=port)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--ir", "kind", default=None, help="Dump kind (see `ir-explorer kinds`).")
@click.pass_obj
def dump(config: ExplorerConfig, file: str, kind: str | None) -> None:
    """Compile FILE and print its IR dump."""
    source = Path(file).read_text()
    result = compile_source(source, kind or config.render.default_kind, config.compiler)

    if result.ir_output:
        click.echo(result.ir_output, nl=False)
    if result.messages:
        click.echo(result.messages, err=True, nl=False)
    if not result.success:
        raise SystemExit(1)


@main.command()
@click.argument("dumpfile", type=click.Path(exists=True, dir_okay=False))
def spans(dumpfile: str) -> None:
    """Print each line of DUMPFILE with the source span it resolves to."""
    text = reindent(Path(dumpfile).read_text())
    lines = text.split("\n")
    line_spans = compute_line_spans(lines)
    width = max((len(str(s)) for s in line_spans if s is not None), default=1)

    for line, span in zip(lines, line_spans):
        label = str(span) if span is not None else "-"
        click.echo(f"{label:<{width}} | {line}")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--ir", "kind", default=None, help="Dump kind to compile to.")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None,
              help="Write the page here instead of stdout.")
@click.option("--from-dump", is_flag=True, help="FILE is already an IR dump.")
@click.pass_obj
def render(
    config: ExplorerConfig,
    file: str,
    kind: str | None,
    output: str | None,
    from_dump: bool,
) -> None:
    """Render FILE as a standalone HTML page of span-colored IR lines."""
    text = Path(file).read_text()
    kind = kind or config.render.default_kind

    if from_dump:
        result = CompileResult(success=True, ir_output=text, messages="")
        title = Path(file).name
    else:
        result = compile_source(text, kind, config.compiler)
        title = f"{Path(file).name} ({kind})"
        if not result.success:
            click.echo(result.messages, err=True, nl=False)

    rendered = render_dump(result, language=config.render.language)
    page = to_html_page(rendered, title=title, style=config.render.style)

    if output is None:
        click.echo(page, nl=False)
    else:
        Path(output).write_text(page)
        click.echo(f"wrote {output} ({len(rendered.lines)} lines)")


@main.command()
@click.pass_obj
def kinds(config: ExplorerConfig) -> None:
    """List the IR dump kinds rustc is asked for."""
    for kind in VALID_KINDS:
        marker = " (default)" if kind == config.render.default_kind else ""
        click.echo(f"{kind}{marker}")


@main.command()
def lsp() -> None:
    """Start the IR dump language server."""
    from ir_explorer.lsp import main as lsp_main

    lsp_main()
