"""Cyclopts CLI entrypoint for the ``mdbook-numeq`` preprocessor.

mdBook drives the executable in two ways: ``mdbook-numeq supports <renderer>``
asks whether a renderer is supported (exit status 0 means yes), and a bare
``mdbook-numeq`` receives ``[context, book]`` JSON on stdin and must answer
with the processed book on stdout. The ``number`` command runs the same
pipeline over a book directory on disk, which is handy for checking equation
numbers without a full ``mdbook build``.

Examples
--------
Register the preprocessor in ``book.toml``:

.. code-block:: toml

    [preprocessor.numeq]
    prefix = true
    depth = 1

Number a book's chapters into ``numbered/``:

>>> from mdbook_numeq.cli import app
>>> app(["number", "docs/book"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .book import iter_chapters
from .config import load_book_config
from .errors import ChapterPathError, NumeqError
from .logging_config import LogLevelName, setup_logging
from .mdbook import NumEqPreprocessor, check_mdbook_version, encode_book, parse_input
from .numbering import number_equations
from .summary_parser import load_book

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_SUBDIR = "numbered"

app = App(
    name="mdbook-numeq",
    help="An mdBook preprocessor that automatically numbers centered equations.",
    config=cyclopts.config.Env("NUMEQ_", command=False),
)

LogLevel = typ.Annotated[LogLevelName, Parameter(help="Log verbosity written to stderr")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _output_path(out_dir: Path, chapter_path: str) -> Path:
    """Return where ``chapter_path`` is written, refusing paths outside ``out_dir``."""
    root = out_dir.resolve()
    target = (root / chapter_path).resolve()
    if not target.is_relative_to(root):
        msg = f"Chapter path '{chapter_path}' would be written outside '{out_dir}'."
        raise ChapterPathError(msg)
    return target


def _fail(exc: NumeqError) -> typ.NoReturn:
    logger.error("%s", exc)
    raise SystemExit(1) from exc


def run_preprocessor(stdin: typ.BinaryIO, stdout: typ.BinaryIO) -> None:
    """Read mdBook's payload from ``stdin`` and write the book to ``stdout``.

    Raises
    ------
    NumeqError
        If the payload, the configuration or the equation labels are invalid.
        Nothing is written to ``stdout`` in that case.
    """
    context, book = parse_input(stdin.read())
    check_mdbook_version(context.mdbook_version)
    processed = NumEqPreprocessor(context).run(book)
    stdout.write(encode_book(processed))
    stdout.flush()


@app.default
def preprocess(*, log_level: LogLevel = "warning") -> None:
    """Process the book mdBook sends on stdin.

    Parameters
    ----------
    log_level : str, optional
        Verbosity of diagnostics written to stderr (``NUMEQ_LOG_LEVEL``).

    Returns
    -------
    None
        The processed book is written to stdout as JSON.
    """
    setup_logging(log_level)
    try:
        run_preprocessor(sys.stdin.buffer, sys.stdout.buffer)
    except NumeqError as exc:
        _fail(exc)


@app.command(help="Check whether a renderer is supported by this preprocessor.")
def supports(renderer: str, *, log_level: LogLevel = "warning") -> None:
    """Exit with status 0 when ``renderer`` is supported, 1 otherwise."""
    setup_logging(log_level)
    preprocessor = NumEqPreprocessor()
    if not preprocessor.supports_renderer(renderer):
        logger.info(
            "The %s preprocessor does not support the '%s' renderer",
            preprocessor.name,
            renderer,
        )
        raise SystemExit(1)


@app.command(help="Number equations of a book directory without running mdBook.")
def number(
    book_dir: typ.Annotated[
        Path, Parameter(help="Directory containing book.toml")
    ] = Path(),
    *,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Where to write the numbered Markdown (default: BOOK/numbered)"),
    ] = None,
    log_level: LogLevel = "warning",
) -> None:
    """Write numbered copies of every chapter of ``book_dir``.

    Parameters
    ----------
    book_dir : Path, optional
        Book directory holding ``book.toml``; defaults to the current directory.
    output_dir : Path or None, optional
        Destination folder mirroring the book's ``src`` layout; defaults to
        ``<book_dir>/numbered``.
    log_level : str, optional
        Verbosity of diagnostics written to stderr.

    Returns
    -------
    None
        Writes one Markdown file per chapter and prints each written path.

    Raises
    ------
    FileNotFoundError
        If ``book.toml``, ``SUMMARY.md`` or a chapter file is missing.
    SystemExit
        With status 1 when numbering fails or a chapter path points outside
        the output directory; no file is written in that case.
    """
    setup_logging(log_level)
    try:
        config = load_book_config(book_dir)
        chapters = load_book(config)
        number_equations(chapters, config.policy)
    except NumeqError as exc:
        _fail(exc)

    out_dir = output_dir or book_dir / DEFAULT_OUTPUT_SUBDIR
    try:
        targets = [
            (_output_path(out_dir, chapter.path), chapter.content)
            for chapter in iter_chapters(chapters)
            if chapter.path is not None
        ]
    except NumeqError as exc:
        _fail(exc)

    for output_path, content in targets:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        print(f"wrote {_format_path(output_path)}")
    logger.info("numbered %s", config.title or _format_path(book_dir))


def main() -> None:
    """Invoke the Cyclopts application behind the ``mdbook-numeq`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
