"""CLI entry point for assetflow."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from assetflow import __version__
from assetflow.exceptions import AssetFlowError
from assetflow.formatters import (
    format_lint_json,
    format_lint_markdown,
    format_lint_table,
    format_processors_table,
    format_rules_table,
)

app = typer.Typer(
    name="assetflow",
    help="Run JS/CSS processor pipelines and lint scripts.",
)
console = Console()


# ---------------------------------------------------------------------------
# Root callback
# ---------------------------------------------------------------------------


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Run JS/CSS processor pipelines and lint scripts."""
    if version:
        console.print(f"assetflow {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


# ---------------------------------------------------------------------------
# process
# ---------------------------------------------------------------------------


@app.command()
def process(
    resource_file: Path = typer.Argument(..., help="JS or CSS file to process."),
    resource_type: str | None = typer.Option(
        None, "--type", "-t", help="Resource type (js|css). Inferred from the extension."
    ),
    minimize: bool = typer.Option(
        True, "--minimize/--no-minimize", help="Allow minimize-only processors."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="Pipeline YAML file."),
    pre: list[str] | None = typer.Option(
        None, "--pre", help="Pre-processor alias (repeat for each)."
    ),
    post: list[str] | None = typer.Option(
        None, "--post", help="Post-processor alias (repeat for each)."
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write result to a file."),
) -> None:
    """Apply a processor pipeline to one resource."""
    from assetflow.loader import (
        build_pipeline,
        detect_resource_type,
        load_pipeline_config,
    )
    from assetflow.models import PipelineConfig, Resource, ResourceType

    rtype = None
    if resource_type:
        try:
            rtype = ResourceType(resource_type.lower())
        except ValueError:
            console.print(f"[red]Unknown resource type:[/red] {resource_type}")
            raise typer.Exit(1) from None

    try:
        cfg = load_pipeline_config(config) if config else PipelineConfig()
        if pre:
            cfg = cfg.model_copy(update={"pre_processors": list(pre)})
        if post:
            cfg = cfg.model_copy(update={"post_processors": list(post)})
        pipeline = build_pipeline(cfg)
        if rtype is None:
            rtype = detect_resource_type(resource_file)
        try:
            content = resource_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise AssetFlowError(f"Failed to read {resource_file}: {exc}") from exc
        resource = Resource(uri=resource_file.as_posix(), type=rtype)
        result = pipeline.process(resource, content, minimize=minimize)
    except AssetFlowError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    if output is not None:
        output.write_text(result, encoding="utf-8")
        console.print(f"[green]Wrote[/green] {output}")
    else:
        typer.echo(result, nl=False)


# ---------------------------------------------------------------------------
# lint
# ---------------------------------------------------------------------------


@app.command()
def lint(
    script_files: list[Path] = typer.Argument(..., help="Script files to lint."),
    options: str | None = typer.Option(
        None, "--options", "-o", help="Comma separated linter flags (e.g. undef,eqeqeq)."
    ),
    json: bool = typer.Option(False, "--json", help="Output as JSON."),
    fmt: str = typer.Option("table", "--format", "-f", help="Output format (table|json|markdown)."),
) -> None:
    """Lint scripts; exit 1 if any violation is found."""
    from assetflow.linter import run_lint

    reports = []
    for path in script_files:
        try:
            script = path.read_text(encoding="utf-8")
        except OSError as exc:
            console.print(f"[red]Error:[/red] Failed to read {path}: {exc}")
            raise typer.Exit(1) from exc
        reports.append(run_lint(script, source=str(path), options=options))

    if json or fmt == "json":
        format_lint_json(reports, console)
    elif fmt == "markdown":
        for report in reports:
            format_lint_markdown(report, console)
    else:
        for report in reports:
            format_lint_table(report, console)

    if any(not r.passed for r in reports):
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# processors
# ---------------------------------------------------------------------------


@app.command()
def processors(
    role: str | None = typer.Option(None, "--role", "-r", help="Filter by role (pre|post)."),
    resource_type: str | None = typer.Option(
        None, "--type", "-t", help="Only processors eligible for this type (js|css)."
    ),
    minimize: bool = typer.Option(
        True, "--minimize/--no-minimize", help="Include minimize-only processors."
    ),
) -> None:
    """List the built-in processors."""
    from assetflow.models import ProcessorRole, ResourceType
    from assetflow.pipeline import filter_processors_to_apply
    from assetflow.registry import create_default_registry

    roles = list(ProcessorRole)
    if role:
        try:
            roles = [ProcessorRole(role.lower())]
        except ValueError:
            console.print(f"[red]Unknown role:[/red] {role}")
            raise typer.Exit(1) from None

    rtype = None
    if resource_type:
        try:
            rtype = ResourceType(resource_type.lower())
        except ValueError:
            console.print(f"[red]Unknown resource type:[/red] {resource_type}")
            raise typer.Exit(1) from None

    registry = create_default_registry()
    descriptors = []
    for r in roles:
        role_descriptors = registry.descriptors(r)
        if rtype is not None:
            # Run the real filter so the listing matches what a pipeline would apply.
            processors_ = registry.processors(r)
            eligible = {id(p) for p in filter_processors_to_apply(minimize, rtype, processors_)}
            keep = {a for a, p in zip(registry.aliases(r), processors_) if id(p) in eligible}
            role_descriptors = [d for d in role_descriptors if d.alias in keep]
        elif not minimize:
            role_descriptors = [d for d in role_descriptors if not d.minimize_aware]
        descriptors.extend(role_descriptors)

    format_processors_table(descriptors, console)


# ---------------------------------------------------------------------------
# rules
# ---------------------------------------------------------------------------


@app.command()
def rules() -> None:
    """List the lint rules and the option that enables each."""
    import assetflow.linter  # noqa: F401
    from assetflow.rules import get_all_rules

    format_rules_table(get_all_rules(), console)
