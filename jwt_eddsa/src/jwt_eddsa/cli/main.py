"""Typer-based command line interface for jwt-eddsa."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional

import typer
from jwt.exceptions import InvalidKeyError, PyJWTError

from ..algorithm import SIGNING_METHOD
from ..config import AppConfig, load_config
from ..keys import (
    generate_key_pair,
    load_private_key_pem,
    load_public_key_pem,
    private_key_pem,
    public_key_pem,
)
from ..logging import configure_logging
from ..paths import default_key_dir
from ..registry import new_jws
from ..version import __version__

app = typer.Typer(help="EdDSA (Ed25519) JSON Web Token signing")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"jwt-eddsa {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", metavar="PATH"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Print the version and exit"
    ),
) -> None:
    ctx.obj = load_config(config)
    configure_logging(ctx.obj.logging.normalized_level())


def _key_path(explicit: Optional[Path], configured: Optional[Path], kind: str) -> Path:
    path = explicit or configured
    if path is None:
        typer.echo(f"No {kind} key given; pass --key or set keys.{kind}_key_path", err=True)
        raise typer.Exit(code=2)
    return path


def _load_key(path: Path, loader: Callable[[bytes], bytes]) -> bytes:
    try:
        return loader(path.read_bytes())
    except OSError as exc:
        typer.echo(f"Cannot read key file {path}: {exc.strerror or exc}", err=True)
        raise typer.Exit(code=2)
    except InvalidKeyError as exc:
        typer.echo(f"Cannot load key from {path}: {exc}", err=True)
        raise typer.Exit(code=2)


def _private_key(ctx: typer.Context, explicit: Optional[Path]) -> bytes:
    config: AppConfig = ctx.obj
    path = _key_path(explicit, config.keys.private_key_path, "private")
    return _load_key(path, load_private_key_pem)


def _public_key(ctx: typer.Context, explicit: Optional[Path]) -> bytes:
    config: AppConfig = ctx.obj
    path = _key_path(explicit, config.keys.public_key_path, "public")
    return _load_key(path, load_public_key_pem)


def _write_private(path: Path, data: bytes) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as handle:
        os.fchmod(handle.fileno(), 0o600)
        handle.write(data)


@app.command()
def keygen(
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="Directory for the PEM files"),
    name: str = typer.Option("eddsa", "--name", help="Base file name"),
) -> None:
    """Create an Ed25519 key pair as PEM files."""
    out_dir = out_dir or default_key_dir()
    pair = generate_key_pair()
    out_dir.mkdir(parents=True, exist_ok=True)
    private_path = out_dir / f"{name}.pem"
    public_path = out_dir / f"{name}.pub.pem"
    _write_private(private_path, private_key_pem(pair.private))
    public_path.write_bytes(public_key_pem(pair.public))
    typer.echo(f"Private key written to {private_path}")
    typer.echo(f"Public key written to {public_path}")


@app.command()
def sign(
    ctx: typer.Context,
    signing_input: str = typer.Argument(..., help="Encoded header and payload joined by '.'"),
    key: Optional[Path] = typer.Option(None, "--key", exists=True, readable=True, help="Private key PEM"),
) -> None:
    """Print the signature segment for a signing input."""
    typer.echo(SIGNING_METHOD.sign_segment(signing_input, _private_key(ctx, key)))


@app.command()
def verify(
    ctx: typer.Context,
    signing_input: str = typer.Argument(..., help="Encoded header and payload joined by '.'"),
    signature: str = typer.Argument(..., help="Encoded signature segment"),
    key: Optional[Path] = typer.Option(None, "--key", exists=True, readable=True, help="Public key PEM"),
) -> None:
    """Check a signature segment; exit code 1 when it does not verify."""
    public = _public_key(ctx, key)
    try:
        SIGNING_METHOD.verify_segment(signing_input, signature, public)
    except PyJWTError as exc:
        typer.echo(f"invalid: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo("valid")


@app.command()
def encode(
    ctx: typer.Context,
    payload: str = typer.Argument(..., help="Payload to sign"),
    key: Optional[Path] = typer.Option(None, "--key", exists=True, readable=True, help="Private key PEM"),
    typ: Optional[str] = typer.Option(None, "--typ", help="Value for the 'typ' header"),
) -> None:
    """Produce a compact token whose header declares EdDSA."""
    token = new_jws().encode(
        payload.encode("utf-8"),
        _private_key(ctx, key),
        algorithm=SIGNING_METHOD.alg,
        headers={"typ": typ},
    )
    typer.echo(token)


@app.command()
def decode(
    ctx: typer.Context,
    token: str = typer.Argument(..., help="Compact token"),
    key: Optional[Path] = typer.Option(None, "--key", exists=True, readable=True, help="Public key PEM"),
) -> None:
    """Verify a compact token and print its payload."""
    public = _public_key(ctx, key)
    try:
        payload = new_jws().decode(token, public, algorithms=[SIGNING_METHOD.alg])
    except PyJWTError as exc:
        typer.echo(f"invalid: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(payload.decode("utf-8", errors="replace"))


if __name__ == "__main__":  # pragma: no cover
    app()
