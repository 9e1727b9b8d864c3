"""Command-line interface for gql-bindgen."""

import logging
import tarfile
import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import click
from graphql import GraphQLSyntaxError

from .core.ast_data import AstData
from .core.compiler import SchemaCompiler, compile_schema, parse_document
from .core.config import CodegenConfig
from .core.errors import DefaultValueOverflowError, SchemaCompilationError
from .core.generator import CodeGenerator
from .core.loader import load_schema_source

ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tgz")


def _checked_members(archive: tarfile.TarFile, destination: str) -> list[tarfile.TarInfo]:
    """Members of ``archive`` that stay inside ``destination``.

    Used where ``tarfile`` has no extraction filters (before 3.10.12).
    """
    root = Path(destination).resolve()
    members = []
    for member in archive.getmembers():
        if not (member.isfile() or member.isdir()):
            raise ValueError(f"Unsupported archive member: {member.name}")
        target = (root / member.name).resolve()
        if target != root and root not in target.parents:
            raise ValueError(f"Archive member escapes the destination: {member.name}")
        members.append(member)
    return members


def extract_archive(archive_path: Path, destination: str) -> None:
    """Unpack a zip or gzipped tar archive into ``destination``."""
    name = archive_path.name.lower()
    if name.endswith(".zip") and zipfile.is_zipfile(archive_path):
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(destination)
    elif name.endswith((".tar.gz", ".tgz")) and tarfile.is_tarfile(archive_path):
        with tarfile.open(archive_path, "r:gz") as archive:
            if hasattr(tarfile, "data_filter"):
                archive.extractall(destination, filter="data")
            else:
                archive.extractall(destination, members=_checked_members(archive, destination))
    else:
        raise ValueError(f"Not a supported schema archive: {archive_path.name}")


@contextmanager
def schema_source(schema: str, verbose: bool) -> Iterator[str]:
    """Yield the SDL text of a schema file, directory or archive."""
    path = Path(schema).resolve()
    if not (path.is_file() and path.name.lower().endswith(ARCHIVE_SUFFIXES)):
        yield _load(path)
        return

    click.echo(f"Extracting archive {path.name}...")
    with tempfile.TemporaryDirectory(prefix="gql-bindgen-") as unpacked:
        try:
            extract_archive(path, unpacked)
        except (ValueError, OSError, tarfile.TarError, zipfile.BadZipFile) as e:
            raise click.ClickException(str(e)) from e
        if verbose:
            click.echo(f"  Unpacked into {unpacked}")
        yield _load(Path(unpacked))


def _load(path: Path) -> str:
    try:
        return load_schema_source(str(path))
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


schema_option = click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True, path_type=str),
    help="GraphQL schema: a .graphql file, a directory of them, or a .zip/.tar.gz/.tgz archive.",
)

verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Print progress details and debug logging.",
)


@click.group()
@click.version_option(package_name="gql-bindgen")
def main():
    """Typed Python bindings for GraphQL schemas.

    Compile a GraphQL SDL schema into resolver contracts, enums, input
    models and query trails.
    """
    pass


@main.command()
@schema_option
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output file for the generated module (e.g., schema.py).",
)
@click.option(
    "--context-type",
    default="Any",
    show_default=True,
    help="Type of the executor context, as a builtin name or dotted path.",
)
@click.option(
    "--error-type",
    default="Exception",
    show_default=True,
    help="Exception type raised by fallible resolvers, as a dotted path.",
)
@click.option(
    "--header",
    default=None,
    help="Comment header placed at the top of the generated module.",
)
@click.option(
    "--template-dir",
    "-t",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory with templates overriding the built-in ones.",
)
@verbose_option
def generate(
    schema: str,
    output: str,
    context_type: str,
    error_type: str,
    header: Optional[str],
    template_dir: Optional[str],
    verbose: bool,
):
    """Generate a Python binding module from a GraphQL schema.

    Examples:

        gql-bindgen generate --schema ./schema.graphql --output ./app/schema.py

        gql-bindgen generate -s ./schema -o ./schema.py --context-type app.Context
    """
    _configure_logging(verbose)
    output_path = Path(output).resolve()

    try:
        config = CodegenConfig(
            context_type=context_type,
            error_type=error_type,
            header=header,
            template_dir=template_dir,
        )
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    with schema_source(schema, verbose) as source:
        if verbose:
            click.echo(f"Schema: {Path(schema).resolve()}")
            click.echo(f"Output: {output_path}")

        click.echo("Compiling schema...")
        try:
            compiled = compile_schema(source)
        except GraphQLSyntaxError as e:
            raise click.ClickException(f"Invalid GraphQL: {e.message}") from e
        except (SchemaCompilationError, DefaultValueOverflowError) as e:
            raise click.ClickException(str(e)) from e

        if verbose:
            click.echo(f"  Scalars: {len(compiled.scalars)}")
            click.echo(f"  Enums: {len(compiled.enums)}")
            click.echo(f"  Objects: {len(compiled.objects)}")
            click.echo(f"  Interfaces: {len(compiled.interfaces)}")
            click.echo(f"  Unions: {len(compiled.unions)}")
            click.echo(f"  Inputs: {len(compiled.input_objects)}")

        click.echo("Generating code...")
        generator = CodeGenerator(compiled, config=config)
        path = generator.write(str(output_path))

    click.echo(f"Done! Generated {path}")


@main.command()
@schema_option
@verbose_option
def check(schema: str, verbose: bool):
    """Report schema diagnostics without generating code.

    Prints every diagnostic sorted by position and exits with status 1
    when there is at least one.

    Examples:

        gql-bindgen check -s ./schema.graphql
    """
    _configure_logging(verbose)

    with schema_source(schema, verbose) as source:
        try:
            document = parse_document(source)
            SchemaCompiler(AstData.build(document)).compile(document)
        except GraphQLSyntaxError as e:
            raise click.ClickException(f"Invalid GraphQL: {e.message}") from e
        except DefaultValueOverflowError as e:
            raise click.ClickException(str(e)) from e
        except SchemaCompilationError as e:
            for error in e.errors:
                click.echo(str(error), err=True)
            raise SystemExit(1) from e

    click.echo("No problems found.")


if __name__ == "__main__":
    main()
