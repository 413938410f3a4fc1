"""filedb CLI — inspect and edit a file-per-document database.

Commands:
    filedb init                       create filedb.toml + database dir
    filedb insert COLL JSON           insert a document
    filedb get COLL ID...             fetch documents by id
    filedb list COLL                  dump every document
    filedb count COLL                 number of documents
    filedb update COLL ID JSON        merge fields into a document
    filedb delete COLL ID             delete a document
    filedb query COLL [--where F=V]   filter / sort / page
    filedb drop COLL                  delete a collection (and nested ones)
    filedb reset                      delete the whole database

Collections are written as paths: ``users`` or ``users/1/posts``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

from filedb import codec
from filedb.config import FileDBConfig, init_config, load_config
from filedb.keywords import QUALIFY_MODES
from filedb.store import FileDB

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_cfg(ctx: click.Context) -> FileDBConfig:
    try:
        cfg = load_config(ctx.obj.get("config_dir"))
    except Exception as exc:
        raise click.ClickException(str(exc)) from exc
    if ctx.obj.get("db_root"):
        cfg.db_root = Path(ctx.obj["db_root"])
    return cfg


def _open_db(ctx: click.Context) -> FileDB:
    cfg = _load_cfg(ctx)
    try:
        return cfg.open()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


def _collection(text: str) -> list[str]:
    segments = [s for s in text.split("/") if s]
    if not segments:
        raise click.BadParameter(f"Invalid collection: {text!r}")
    return segments


def _value(text: str) -> Any:
    """Parse a JSON literal, falling back to the raw string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _json_object(text: str) -> dict[str, Any]:
    try:
        data = codec.loads(text)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise click.BadParameter("Expected a JSON object")
    return data


def _echo(data: Any) -> None:
    click.echo(codec.dumps(data))


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="filedb")
@click.option("--config-dir", default=None, help="Directory holding filedb.toml (default: search upward)")
@click.option("--db", "db_root", default=None, help="Database directory (overrides config)")
@click.option("--verbose", "-v", is_flag=True, help="Log store operations to stderr")
@click.pass_context
def cli(ctx: click.Context, config_dir: str | None, db_root: str | None, verbose: bool) -> None:
    """filedb — schema-less documents stored as files."""
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir
    ctx.obj["db_root"] = db_root
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(message)s")


# ---------------------------------------------------------------------------
# filedb init
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--dir", "root", default=".", show_default=True, help="Project root")
@click.option("--ids", "id_strategy", default="sequential", show_default=True,
              type=click.Choice(["sequential", "uuid"]))
@click.option("--qualify", default="none", show_default=True, type=click.Choice(QUALIFY_MODES))
def init(root: str, id_strategy: str, qualify: str) -> None:
    """Create filedb.toml and the database directory."""
    root_path = Path(root).resolve()
    try:
        config_path = init_config(root_path, id_strategy=id_strategy, qualify=qualify)
        click.echo(f"Created {config_path}")
    except FileExistsError:
        click.echo("filedb.toml already exists — skipping init")

    cfg = load_config(root_path)
    cfg.db_root.mkdir(parents=True, exist_ok=True)
    click.echo(f"Database dir : {cfg.db_root}")


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("collection")
@click.argument("data")
@click.pass_context
def insert(ctx: click.Context, collection: str, data: str) -> None:
    """Insert DATA (a JSON object) into COLLECTION."""
    db = _open_db(ctx)
    _echo(db.insert(_collection(collection), _json_object(data)))


@cli.command()
@click.argument("collection")
@click.argument("ids", nargs=-1, required=True)
@click.pass_context
def get(ctx: click.Context, collection: str, ids: tuple[str, ...]) -> None:
    """Print the documents with the given IDS."""
    db = _open_db(ctx)
    coll = _collection(collection)
    if len(ids) == 1:
        doc = db.get_by_id(coll, ids[0])
        if doc is None:
            raise click.ClickException(f"Document not found: {collection}/{ids[0]}")
        _echo(doc)
        return
    _echo(db.get_by_ids(coll, list(ids)))


@cli.command(name="list")
@click.argument("collection")
@click.pass_context
def list_cmd(ctx: click.Context, collection: str) -> None:
    """Print every document in COLLECTION."""
    db = _open_db(ctx)
    _echo(db.get_all(_collection(collection)))


@cli.command()
@click.argument("collection")
@click.pass_context
def count(ctx: click.Context, collection: str) -> None:
    """Print the number of documents in COLLECTION."""
    db = _open_db(ctx)
    click.echo(db.get_count(_collection(collection)))


@cli.command()
@click.argument("collection")
@click.argument("doc_id")
@click.argument("data")
@click.pass_context
def update(ctx: click.Context, collection: str, doc_id: str, data: str) -> None:
    """Merge DATA (a JSON object) into an existing document."""
    db = _open_db(ctx)
    result = db.update(_collection(collection), doc_id, _json_object(data))
    if result is False:
        raise click.ClickException(f"Document not found: {collection}/{doc_id}")
    _echo(result)


@cli.command()
@click.argument("collection")
@click.argument("doc_id")
@click.pass_context
def delete(ctx: click.Context, collection: str, doc_id: str) -> None:
    """Delete a document."""
    db = _open_db(ctx)
    if not db.delete(_collection(collection), doc_id):
        raise click.ClickException(f"Document not found: {collection}/{doc_id}")
    click.echo(f"Deleted {collection}/{doc_id}")


# ---------------------------------------------------------------------------
# filedb query
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("collection")
@click.option("--where", "-w", "conditions", multiple=True, metavar="FIELD=VALUE",
              help="Equality filter; VALUE is parsed as JSON when possible. Repeatable.")
@click.option("--order-by", "-o", default=None, metavar="FIELD[:asc|desc]")
@click.option("--offset", default=None, type=click.IntRange(min=0))
@click.option("--limit", "-l", default=None, type=click.IntRange(min=0))
@click.pass_context
def query(
    ctx: click.Context,
    collection: str,
    conditions: tuple[str, ...],
    order_by: str | None,
    offset: int | None,
    limit: int | None,
) -> None:
    """Filter, sort and page the documents of COLLECTION."""
    db = _open_db(ctx)
    pairs: list[Any] = []
    for cond in conditions:
        field, sep, raw = cond.partition("=")
        if not sep or not field:
            raise click.BadParameter(f"Expected FIELD=VALUE, got {cond!r}", param_hint="--where")
        pairs.extend([field, _value(raw)])

    order: tuple[str, str] | None = None
    if order_by:
        field, _, direction = order_by.partition(":")
        order = (field, direction or "asc")

    coll = _collection(collection)
    try:
        if pairs:
            result = db.get_by_key(coll, *pairs, order_by=order, offset=offset, limit=limit)
        else:
            result = db.query(coll, order_by=order, offset=offset, limit=limit)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    _echo(result)


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("collection")
@click.pass_context
def drop(ctx: click.Context, collection: str) -> None:
    """Delete COLLECTION, its counter and every collection nested under it."""
    db = _open_db(ctx)
    db.delete_collection(_collection(collection))
    click.echo(f"Dropped {collection}")


@cli.command()
@click.confirmation_option(prompt="Delete the whole database?")
@click.pass_context
def reset(ctx: click.Context) -> None:
    """Delete the whole database directory."""
    db = _open_db(ctx)
    db.reset()
    click.echo(f"Removed {db.root}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
