from __future__ import annotations

"""Quiz store backed by a pandas DataFrame, persisted as JSON or Parquet.

The store is the single owner of the quiz table. Every accessor returns new
``Quiz`` instances, so nothing handed out can change the table. Ids are
assigned once and never renumbered by a deletion.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable, List, Optional

import pandas as pd
from pydantic import ValidationError

try:
    import pyarrow  # noqa: F401
except Exception:  # pragma: no cover
    pyarrow = None  # type: ignore

from ..app.explain import trace as xtrace
from ..errors import QuizNotFound
from .schema import COLUMNS, DEFAULT_QUIZZES, DTYPES, Quiz, QuizRow


SUPPORTED_SUFFIXES = {".json", ".parquet"}
MAX_ID = 4294967295


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in DTYPES.items()})


def _fix_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    for col, dt in DTYPES.items():
        df[col] = df[col].astype(dt)
    return df[COLUMNS]


def validate_records(records: Iterable[Any]) -> pd.DataFrame:
    """Validate raw records (dicts or QuizRow) and return a typed DataFrame.

    Records without an ``id`` (legacy ``{question, answer}`` files) get
    sequential ids after the highest id seen so far.
    """
    rows: list[QuizRow] = []
    pending: list[dict] = []
    for r in records:
        if isinstance(r, QuizRow):
            rows.append(r)
        elif isinstance(r, dict) and r.get("id") is None:
            pending.append(r)
        else:
            rows.append(QuizRow.model_validate(r))
    next_id = max((r.id for r in rows), default=0) + 1
    for r in pending:
        rows.append(QuizRow.model_validate({**r, "id": next_id}))
        next_id += 1
    ids = [r.id for r in rows]
    if len(ids) != len(set(ids)):
        raise ValueError("Duplicate quiz ids in records")
    if not rows:
        return _empty_df()
    df = pd.DataFrame([r.model_dump() for r in rows])
    return _fix_dtypes(df).sort_values("id").reset_index(drop=True)


def _row_to_quiz(row: Any) -> Quiz:
    return Quiz(id=int(row["id"]), question=str(row["question"]), answer=str(row["answer"]))


def _make_row(quiz_id: int, question: str, answer: str) -> QuizRow:
    try:
        return QuizRow(id=quiz_id, question=question, answer=answer)
    except ValidationError as e:
        raise ValueError("Question and answer must not be empty.") from e


class QuizStore:
    """Authoritative collection of quizzes.

    Args:
        path: ``.json`` or ``.parquet`` file; None keeps the store in memory.
        seed_defaults: seed the default quizzes when the file does not exist.
    """

    def __init__(self, path: Optional[Path] = None, seed_defaults: bool = True) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None and self.path.suffix not in SUPPORTED_SUFFIXES:
            raise ValueError(f"Unsupported store format: {self.path.suffix or self.path.name}")
        self._df = _empty_df()
        self._next_id = 1
        self._load(seed_defaults)

    # --- persistence ---

    def _load(self, seed_defaults: bool) -> None:
        if self.path is not None and self.path.exists():
            if self.path.suffix == ".parquet":
                raw = pd.read_parquet(self.path, engine="pyarrow")
                records = [
                    {"id": int(r["id"]), "question": str(r["question"]), "answer": str(r["answer"])}
                    for r in raw.to_dict(orient="records")
                ]
            else:
                with self.path.open("r", encoding="utf-8") as f:
                    records = json.load(f) or []
                if not isinstance(records, list):
                    raise ValueError(f"Quiz file must hold a list: {self.path}")
            self._df = validate_records(records)
            self._next_id = self._max_id() + 1
            xtrace("store_loaded", {"path": str(self.path), "count": self.count()})
            return
        if seed_defaults:
            self._df = validate_records(DEFAULT_QUIZZES)
            self._next_id = self._max_id() + 1
            self._save()

    def _save(self, df: Optional[pd.DataFrame] = None) -> None:
        """Write ``df`` (default: the current table); the table itself is not touched."""
        df = self._df if df is None else df
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        if self.path.suffix == ".parquet":
            df.to_parquet(tmp_path, engine="pyarrow", compression="zstd", index=False)
        else:
            with tmp_path.open("w", encoding="utf-8") as f:
                records = [asdict(_row_to_quiz(r)) for r in df.to_dict(orient="records")]
                json.dump(records, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)
        xtrace("store_saved", {"path": str(self.path), "count": int(len(df))})

    def _max_id(self) -> int:
        if self._df.empty:
            return 0
        return int(self._df["id"].max())

    def _mask(self, quiz_id: int) -> pd.Series:
        if not 1 <= int(quiz_id) <= MAX_ID:
            raise QuizNotFound(quiz_id)
        mask = self._df["id"] == int(quiz_id)
        if not bool(mask.any()):
            raise QuizNotFound(quiz_id)
        return mask

    # --- queries ---

    def count(self) -> int:
        return int(len(self._df))

    def all_ids(self) -> List[int]:
        return [int(i) for i in self._df["id"].tolist()]

    def get_all(self) -> List[Quiz]:
        return [_row_to_quiz(row) for row in self._df.to_dict(orient="records")]

    def get_by_id(self, quiz_id: int) -> Quiz:
        row = self._df[self._mask(quiz_id)].iloc[0]
        return _row_to_quiz(row)

    # --- mutations ---
    # New tables are written first and only then replace self._df, so a
    # failed write leaves memory matching the file.

    def add(self, question: str, answer: str) -> Quiz:
        row = _make_row(self._next_id, question, answer)
        df_new = _fix_dtypes(pd.DataFrame([row.model_dump()]))
        frames = [df for df in (self._df, df_new) if not df.empty]
        df = _fix_dtypes(pd.concat(frames, ignore_index=True))
        self._save(df)
        self._df = df
        self._next_id += 1
        return row.to_quiz()

    def update(self, quiz_id: int, question: str, answer: str) -> Quiz:
        mask = self._mask(quiz_id)
        row = _make_row(quiz_id, question, answer)
        df = self._df.copy()
        df.loc[mask, "question"] = row.question
        df.loc[mask, "answer"] = row.answer
        self._save(df)
        self._df = df
        return row.to_quiz()

    def delete(self, quiz_id: int) -> None:
        mask = self._mask(quiz_id)
        df = self._df[~mask].reset_index(drop=True)
        self._save(df)
        self._df = df
