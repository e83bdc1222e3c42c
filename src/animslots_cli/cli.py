from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import typer

from animslots import (
    AnimationLocator,
    AppConfig,
    MappingEditor,
    MappingStore,
    PathResolver,
    load_config,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = typer.Typer(help="Animation slot mapping CLI")


@dataclass
class CliState:
    config: AppConfig
    resolver: PathResolver
    store: MappingStore
    locator: AnimationLocator

    def editor(self, model: str) -> MappingEditor:
        try:
            return MappingEditor(
                self.store,
                self.resolver,
                model,
                slots=self.config.slots,
                on_saved=[self.locator.invalidate],
            )
        except ValueError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc

    def model_dir(self, model: str) -> str:
        try:
            return str(self.resolver.model_dir(model))
        except ValueError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Optional JSON/YAML config file path.",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    models_root: Path | None = typer.Option(
        None,
        "--models-root",
        help="Override paths.models_root from the config.",
    ),
) -> None:
    """Inspect and edit per-model animation slot mappings."""
    try:
        config = load_config(config_path) if config_path is not None else AppConfig()
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    if models_root is not None:
        config = config.model_copy(
            update={"paths": config.paths.model_copy(update={"models_root": str(models_root)})}
        )

    resolver = PathResolver.from_config(config)
    store = MappingStore(resolver)
    ctx.obj = CliState(
        config=config,
        resolver=resolver,
        store=store,
        locator=AnimationLocator(store, resolver),
    )


@app.command("slots")
def list_slots(ctx: typer.Context) -> None:
    """List configured animation slots."""
    state: CliState = ctx.obj
    for name in state.config.slots.names:
        typer.echo(f"{name}\t{state.config.slots.label_for(name)}")


@app.command("show")
def show_mapping(
    ctx: typer.Context,
    model: str = typer.Argument(..., help="Model directory name."),
) -> None:
    """Print the slot -> file mapping of a model."""
    state: CliState = ctx.obj
    editor = state.editor(model)
    typer.echo(_render_mapping_table(editor))
    typer.echo(editor.stats().render())


@app.command("set")
def set_slot(
    ctx: typer.Context,
    model: str = typer.Argument(..., help="Model directory name."),
    slot: str = typer.Argument(..., help="Animation slot, e.g. idle."),
    file_name: str = typer.Argument(..., help="Animation file name inside anims/."),
) -> None:
    """Map one slot to an animation file."""
    state: CliState = ctx.obj
    _require_known_slot(state, slot)
    if Path(file_name).name != file_name:
        typer.echo("file name must not contain directories", err=True)
        raise typer.Exit(code=1)

    model_dir = state.model_dir(model)
    state.store.set_mapping(model_dir, slot, file_name)
    typer.echo(f"{slot} -> {file_name}")


@app.command("unset")
def unset_slot(
    ctx: typer.Context,
    model: str = typer.Argument(..., help="Model directory name."),
    slot: str = typer.Argument(..., help="Animation slot to clear."),
) -> None:
    """Remove the mapping of one slot."""
    state: CliState = ctx.obj
    _require_known_slot(state, slot)
    model_dir = state.model_dir(model)
    state.store.set_mapping(model_dir, slot, None)
    typer.echo(f"{slot} cleared")


@app.command("clear")
def clear_model(
    ctx: typer.Context,
    model: str = typer.Argument(..., help="Model directory name."),
) -> None:
    """Clear every slot of a model."""
    state: CliState = ctx.obj
    editor = state.editor(model)
    editor.clear_all()
    editor.save()
    typer.echo(f"cleared {model}")


@app.command("files")
def list_files(
    ctx: typer.Context,
    model: str = typer.Argument(..., help="Model directory name."),
) -> None:
    """List candidate animation files of a model."""
    state: CliState = ctx.obj
    editor = state.editor(model)
    for name in editor.available_files:
        typer.echo(name)
    typer.echo(f"files={len(editor.available_files)}")


@app.command("locate")
def locate_slot(
    ctx: typer.Context,
    model: str = typer.Argument(..., help="Model directory name."),
    slot: str = typer.Argument(..., help="Animation slot to resolve."),
) -> None:
    """Print the animation file path a slot resolves to."""
    state: CliState = ctx.obj
    path = state.locator.locate(state.model_dir(model), slot)
    if path is None:
        typer.echo(f"no animation file for slot={slot}", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(path))


def _require_known_slot(state: CliState, slot: str) -> None:
    if slot not in state.config.slots.names:
        typer.echo(f"unknown slot: {slot}", err=True)
        raise typer.Exit(code=1)


def _render_mapping_table(editor: MappingEditor) -> str:
    headers = ("slot", "label", "file")
    rows = [
        (slot.name, slot.display_name, editor.mapped_file(slot.name) or "-")
        for slot in editor.slots
    ]

    widths = [
        max(len(headers[column]), *(len(row[column]) for row in rows))
        for column in range(len(headers))
    ]

    def _line(values: tuple[str, str, str]) -> str:
        return " | ".join(
            value.ljust(widths[index]) for index, value in enumerate(values)
        )

    divider = "-+-".join("-" * width for width in widths)
    body = [_line(headers), divider]
    body.extend(_line(row) for row in rows)
    return "\n".join(body)
