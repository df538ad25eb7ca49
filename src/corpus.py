from pathlib import Path

import polars as pl

from config import CORPUS_FILE_PATH, TEXT_COLUMN


class Corpus:
    """An ordered list of document texts read from a CSV or Parquet table.

    Position in :attr:`documents` is the document's identity for ranking.
    """

    def __init__(
        self, file_path: Path = CORPUS_FILE_PATH, text_column: str = TEXT_COLUMN
    ) -> None:
        self.file_path: Path | None = file_path
        self.text_column: str = text_column
        self.documents: list[str] = self._construct_documents()

    # ------------------------------------------------------------------
    # Internal construction
    # ------------------------------------------------------------------

    @staticmethod
    def _documents_from_df(df: pl.DataFrame, text_column: str) -> list[str]:
        if text_column not in df.columns:
            raise ValueError(
                f"Column {text_column!r} not found; available columns: {df.columns}"
            )
        return df[text_column].drop_nulls().cast(pl.Utf8).to_list()

    def _construct_documents(self) -> list[str]:
        df = pl.read_csv(self.file_path)
        return Corpus._documents_from_df(df, self.text_column)

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_parquet(cls, path: Path, text_column: str = TEXT_COLUMN) -> "Corpus":
        """Load documents from the *text_column* of a Parquet file."""
        obj = cls.__new__(cls)
        obj.file_path = path
        obj.text_column = text_column
        obj.documents = cls._documents_from_df(pl.read_parquet(path), text_column)
        return obj

    @classmethod
    def from_path(cls, path: Path, text_column: str = TEXT_COLUMN) -> "Corpus":
        """Pick the reader from the file suffix (``.csv`` or ``.parquet``)."""
        suffix = path.suffix.lower()
        if suffix == ".csv":
            return cls(path, text_column)
        if suffix == ".parquet":
            return cls.from_parquet(path, text_column)
        raise ValueError(
            f"Unsupported corpus format {suffix!r}; expected .csv or .parquet"
        )

    @classmethod
    def from_texts(cls, texts: list[str]) -> "Corpus":
        obj = cls.__new__(cls)
        obj.file_path = None
        obj.text_column = TEXT_COLUMN
        obj.documents = list(texts)
        return obj

    def __len__(self) -> int:
        return len(self.documents)


if __name__ == "__main__":
    corpus = Corpus()
    print(f"{len(corpus)} documents in {corpus.file_path}")
