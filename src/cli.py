"""CLI for ranking a corpus of documents against a free-text query."""

import logging
import sys
from pathlib import Path
from typing import Optional

sys.path.insert(0, str(Path(__file__).parent))  # makes bare imports work

import typer

from config import (
    CORPUS_FILE_PATH,
    DEFAULT_TOP_N,
    LOG_LEVEL,
    SCORE_DECIMALS,
    TEXT_COLUMN,
)
from corpus import Corpus
from search_engine import SearchEngine

app = typer.Typer(help="Rank documents against a query by TF-IDF cosine similarity.")


def _build_engine(corpus_path: Path, text_column: str) -> SearchEngine:
    typer.echo("Loading corpus…", err=True)
    corpus = Corpus.from_path(corpus_path, text_column)
    return SearchEngine(corpus.documents)


def _read_query() -> str | None:
    """Prompt on stderr and read one line from stdin; ``None`` at end of input."""
    typer.echo("Enter your search query: ", nl=False, err=True)
    line = sys.stdin.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def _echo_explanation(engine: SearchEngine, query: str) -> None:
    matched = engine.explain(query)
    typer.echo(f"Query matched {len(matched)} term(s)")
    for term in matched:
        typer.echo(
            f"  '{term.term}':  tfidf={term.weight:.{SCORE_DECIMALS}f}"
            f"  idf={term.idf:.{SCORE_DECIMALS}f}"
        )
    unmatched = engine.unmatched_terms(query)
    if unmatched:
        typer.echo(f"  not in vocabulary: {', '.join(unmatched)}")


@app.command()
def search(
    query: Optional[str] = typer.Argument(
        None, help="Free-text query; read from stdin when omitted"
    ),
    top_n: int = typer.Option(
        DEFAULT_TOP_N, "--top-n", "-n", min=0, help="Maximum number of results"
    ),
    corpus: Path = typer.Option(
        CORPUS_FILE_PATH, "--corpus", "-c", help="CSV or Parquet file of documents"
    ),
    column: str = typer.Option(
        TEXT_COLUMN, "--column", help="Column holding the document text"
    ),
    explain: bool = typer.Option(
        False, "--explain", "-e", help="Show which query terms matched the vocabulary"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        engine = _build_engine(corpus, column)
    except (FileNotFoundError, ValueError) as exc:
        typer.secho(
            f"Could not load corpus {corpus}: {exc}", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1) from exc

    if query is None:
        query = _read_query()
        if query is None:
            typer.echo("No query provided.", err=True)
            raise typer.Exit(code=1)

    if explain:
        _echo_explanation(engine, query)

    results = engine.search(query, top_n=top_n)
    if not results:
        typer.echo("No matching documents found.")
        return

    typer.echo("\nTop search results:")
    for r in results:
        typer.echo(
            f"\n[{r.rank}] Score: {r.score:.{SCORE_DECIMALS}f} | Document: {r.document}"
        )


if __name__ == "__main__":
    app()
