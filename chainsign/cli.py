"""chainsign CLI application with Typer."""

import logging
from pathlib import Path
from typing import Annotated, NoReturn
from uuid import UUID

import typer
from pydantic import ValidationError

from chainsign import __version__
from chainsign.bootstrap import ApplicationContainer, bootstrap_application
from chainsign.config import get_settings, set_settings
from chainsign.errors import ChainSignError
from chainsign.utils.cli_output import json_response

app = typer.Typer(
    name="chainsign",
    help="Signature devices with tamper-evident signature chains",
    add_completion=True,
    no_args_is_help=True,
)
device_app = typer.Typer(help="Signature device management")
app.add_typer(device_app, name="device")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"chainsign version {__version__}")
        raise typer.Exit()


def _fail(exc: ChainSignError) -> NoReturn:
    typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def _container() -> ApplicationContainer:
    try:
        return bootstrap_application()
    except ChainSignError as exc:
        _fail(exc)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Override data directory"),
    ] = None,
    backend: Annotated[
        str | None,
        typer.Option("--backend", help="Device store backend: memory or jsonl"),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)"),
    ] = None,
) -> None:
    """chainsign - chained signatures from named signature devices."""
    # Update settings with CLI flags; assignment runs the Settings validators
    settings = get_settings()
    overrides = (
        ("--data-dir", "data_dir", data_dir),
        ("--backend", "repository_backend", backend),
        ("--log-level", "log_level", log_level),
    )
    for option, field, value in overrides:
        if value is None:
            continue
        try:
            setattr(settings, field, value)
        except ValidationError as exc:
            raise typer.BadParameter(exc.errors()[0]["msg"], param_hint=option) from exc
    set_settings(settings)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("algorithms")
def list_algorithms() -> None:
    """List registered signing algorithms."""
    container = _container()
    for name in container.signature_service.algorithm_names():
        typer.echo(name)


@device_app.command("create")
def device_create(
    algorithm: Annotated[str, typer.Argument(help="Signing algorithm (e.g. RSA, ECC)")],
    label: Annotated[
        str,
        typer.Option("--label", "-l", help="Display label for the device"),
    ] = "",
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Create a signature device with a fresh key pair."""
    container = _container()
    try:
        device_id = container.signature_service.create_device(algorithm, label)
    except ChainSignError as exc:
        _fail(exc)

    if json_output:
        typer.echo(json_response("device_created", 1, id=str(device_id)))
    else:
        typer.secho(f"Created device {device_id}", fg=typer.colors.GREEN)


@device_app.command("list")
def device_list(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List signature devices."""
    container = _container()
    devices = container.signature_service.list_devices()

    if json_output:
        typer.echo(
            json_response(
                "device_list",
                1,
                total_devices=len(devices),
                devices=[device.model_dump(mode="json") for device in devices],
            )
        )
        return

    if not devices:
        typer.secho("No signature devices found", fg=typer.colors.YELLOW)
        return

    for device in devices:
        typer.echo(
            f"{device.id} | {device.algorithm} | {device.signature_counter} | {device.label}"
        )


@device_app.command("show")
def device_show(
    device_id: Annotated[UUID, typer.Argument(help="Device identifier")],
    public_key: Annotated[
        bool,
        typer.Option("--public-key", help="Also print the PEM public key"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show one signature device."""
    container = _container()
    service = container.signature_service
    try:
        device = service.get_device(device_id)
        pem = service.public_key(device_id).decode("ascii") if public_key else None
    except ChainSignError as exc:
        _fail(exc)

    if json_output:
        payload = device.model_dump(mode="json")
        if pem is not None:
            payload["public_key"] = pem
        typer.echo(json_response("device", 1, **payload))
        return

    typer.echo(f"id:        {device.id}")
    typer.echo(f"label:     {device.label}")
    typer.echo(f"algorithm: {device.algorithm}")
    typer.echo(f"counter:   {device.signature_counter}")
    if pem is not None:
        typer.echo(pem.rstrip("\n"))


@app.command("sign")
def sign(
    device_id: Annotated[UUID, typer.Argument(help="Device identifier")],
    data: Annotated[str, typer.Argument(help="Data to sign")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Sign data with a device, extending its signature chain."""
    container = _container()
    try:
        result = container.signature_service.sign(device_id, data)
    except ChainSignError as exc:
        _fail(exc)

    if json_output:
        typer.echo(json_response("signature", 1, **result.model_dump(mode="json")))
    else:
        typer.echo(f"signature:   {result.signature}")
        typer.echo(f"signed_data: {result.signed_data}")


@app.command("verify")
def verify(
    device_id: Annotated[UUID, typer.Argument(help="Device identifier")],
    signed_data: Annotated[str, typer.Argument(help="Exact signed payload")],
    signature: Annotated[str, typer.Argument(help="Base64 signature")],
) -> None:
    """Verify a signature against a device's public key."""
    container = _container()
    try:
        valid = container.signature_service.verify_signature(device_id, signed_data, signature)
    except ChainSignError as exc:
        _fail(exc)

    if valid:
        typer.secho("Signature is valid", fg=typer.colors.GREEN)
        return

    typer.secho("Signature is invalid", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
