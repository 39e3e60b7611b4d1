from __future__ import annotations

import json
import logging
from typing import Any

import typer
import yaml

from tplname.config import load_config, normalize_extensions, resolve_output_format, write_default_config
from tplname.grouping import group_parsed, group_templates
from tplname.models import ParsedFilename
from tplname.naming import parse_template_filename, requires_face_type

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Template filename parser and naming checker.")
LOGGER = logging.getLogger("tplname")


def _setup_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    # basicConfig 在根 logger 已有 handler 时不生效，包 logger 的级别单独设置
    LOGGER.setLevel(numeric)


def _load_config_or_exit() -> dict[str, Any]:
    try:
        return load_config()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        typer.secho(f"Config load failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(1)


def _prepare(log_level: str | None, output_format: str | None) -> tuple[dict[str, Any], str]:
    cfg = _load_config_or_exit()
    _setup_logging(log_level or str(cfg.get("log_level", "info")))
    try:
        fmt = resolve_output_format(output_format or str(cfg.get("output_format", "json")))
    except ValueError as exc:
        typer.secho(str(exc), err=True, fg=typer.colors.RED)
        raise typer.Exit(1)
    return cfg, fmt


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _extension_of(name: str, parsed: ParsedFilename) -> str:
    return name[len(parsed.basename):].lower()


@app.command("parse")
def parse_names(
    names: list[str] = typer.Argument(..., help="Template filenames, with or without extension."),
    output_format: str | None = typer.Option(None, "--format", help="Output format: json|text"),
    log_level: str | None = typer.Option(None, "--log-level"),
) -> None:
    """Parse template filenames into group type, random code and face type."""
    _, fmt = _prepare(log_level, output_format)
    results = [parse_template_filename(name) for name in names]
    if fmt == "json":
        _echo_json([parsed.to_dict() for parsed in results])
        return
    for name, parsed in zip(names, results):
        if parsed.is_valid:
            typer.echo(f"{name}\t{parsed.template_group_id}\t{parsed.face_type}")
        else:
            typer.echo(f"{name}\tINVALID\t{parsed.error}")


@app.command("validate")
def validate_names(
    names: list[str] = typer.Argument(..., help="Template filenames to check before upload."),
    strict: bool | None = typer.Option(
        None,
        "--strict/--no-strict",
        help="Also fail face-type groups missing their narrow or wide variant.",
    ),
    extensions: list[str] | None = typer.Option(
        None,
        "--ext",
        help="Allowed extension, repeatable (default: from config).",
    ),
    log_level: str | None = typer.Option(None, "--log-level"),
) -> None:
    """Reject filenames that break the template naming rule."""
    cfg, _ = _prepare(log_level, None)
    strict_val = bool(cfg.get("strict", False)) if strict is None else strict
    allowed = normalize_extensions(extensions or cfg.get("extensions"))

    failures: list[tuple[str, str]] = []
    accepted: list[ParsedFilename] = []
    for name in names:
        parsed = parse_template_filename(name)
        ext = _extension_of(name, parsed)
        if not parsed.is_valid:
            failures.append((name, parsed.error or "invalid"))
        elif allowed and ext and ext not in allowed:
            failures.append((name, f"unsupported extension: {ext}"))
        else:
            accepted.append(parsed)
            LOGGER.debug("OK   %s -> %s (%s)", name, parsed.template_group_id, parsed.face_type)

    if strict_val:
        for group in group_parsed(accepted).values():
            missing = group.missing_face_types()
            if group.requires_face_type and missing:
                failures.append((group.template_group_id, f"missing variants: {', '.join(missing)}"))

    for subject, reason in failures:
        LOGGER.error("FAIL %s  %s", subject, reason)

    typer.echo(f"Done. valid={len(accepted)} failed={len(failures)}")
    if failures:
        typer.secho("Failures:", fg=typer.colors.RED)
        for subject, reason in failures:
            typer.secho(f"  {subject}: {reason}", fg=typer.colors.RED)
        raise typer.Exit(1)


@app.command("group")
def group_names(
    names: list[str] = typer.Argument(..., help="Template filenames to group."),
    output_format: str | None = typer.Option(None, "--format", help="Output format: json|text"),
    log_level: str | None = typer.Option(None, "--log-level"),
) -> None:
    """Group narrow/wide variants by template group id."""
    _, fmt = _prepare(log_level, output_format)
    groups = group_templates(names)
    if fmt == "json":
        _echo_json([group.to_dict() for group in groups.values()])
        return
    for group in groups.values():
        variants = ",".join(sorted(group.variants))
        missing = ",".join(group.missing_face_types()) or "-"
        status = "ok" if group.is_valid else "invalid"
        typer.echo(f"{group.template_group_id}\t{status}\tvariants={variants}\tmissing={missing}")


@app.command("requires")
def requires(
    codes: list[str] = typer.Argument(..., help="Group type codes, e.g. girl_young."),
) -> None:
    """Show whether each group type needs separate narrow/wide templates."""
    for code in codes:
        flag = "yes" if requires_face_type(code) else "no"
        typer.echo(f"{code}\t{flag}")


@app.command("init-config")
def init_config(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config file."),
) -> None:
    path = write_default_config(force=force)
    typer.echo(f"Config initialized: {path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
