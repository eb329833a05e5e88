from __future__ import annotations

import logging
import os
import re
import tempfile
import threading
from typing import Dict, List, Protocol

from pydantic import ValidationError

from core.assessment.errors import EvaluationNotFound, StoreError
from core.assessment.events import CORRUPT_RECORD_SKIPPED, log_security_event
from core.assessment.models import Evaluation, EvaluationSummary

logger = logging.getLogger("security_dashboard.store")

FILE_PREFIX = "evaluation_"
FILE_SUFFIX = ".json"

_VALID_ID = re.compile(r"^[0-9A-Za-z-]{1,64}$")


class EvaluationStore(Protocol):
    def save(self, evaluation: Evaluation) -> None: ...

    def list(self) -> List[EvaluationSummary]: ...

    def get(self, evaluation_id: str) -> Evaluation: ...


def _newest_first(summaries: List[EvaluationSummary]) -> List[EvaluationSummary]:
    # sort is stable, so equal timestamps keep arrival order
    return sorted(summaries, key=lambda s: s.timestamp, reverse=True)


# -------------------------------------------------------------------
# File store
# -------------------------------------------------------------------

class FileEvaluationStore:
    """
    One pretty-printed JSON file per evaluation: <data_dir>/evaluation_<id>.json

    Saves go to a hidden temp file in the same directory and are published
    with os.replace, so a concurrent list() never sees a half-written record.
    """

    def __init__(self, data_dir: str):
        self.data_dir = os.path.abspath(data_dir)

    def initialize(self) -> None:
        try:
            os.makedirs(self.data_dir, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Cannot create data directory {self.data_dir}: {e}") from e
        logger.info("Data directory ready: %s", self.data_dir)

    def _path_for(self, evaluation_id: str) -> str:
        return os.path.join(self.data_dir, f"{FILE_PREFIX}{evaluation_id}{FILE_SUFFIX}")

    def save(self, evaluation: Evaluation) -> None:
        if not _VALID_ID.match(evaluation.id):
            raise StoreError(f"Refusing to store evaluation with malformed id: {evaluation.id!r}")

        payload = evaluation.model_dump_json(indent=2)
        tmp_path = None
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.data_dir,
                prefix=".tmp-",
                suffix=FILE_SUFFIX,
                delete=False,
            ) as fh:
                tmp_path = fh.name
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self._path_for(evaluation.id))
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.unlink(tmp_path)
                except OSError:
                    logger.exception("Failed removing temp file %s", tmp_path)
            raise StoreError(f"Failed writing evaluation {evaluation.id}: {e}") from e

    def list(self) -> List[EvaluationSummary]:
        try:
            names = sorted(os.listdir(self.data_dir))
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StoreError(f"Cannot read data directory {self.data_dir}: {e}") from e

        summaries: List[EvaluationSummary] = []
        for name in names:
            if not (name.startswith(FILE_PREFIX) and name.endswith(FILE_SUFFIX)):
                continue
            path = os.path.join(self.data_dir, name)
            try:
                with open(path, "r", encoding="utf-8") as fh:
                    evaluation = Evaluation.model_validate_json(fh.read())
            except (OSError, ValueError, ValidationError) as e:
                log_security_event(CORRUPT_RECORD_SKIPPED, file=name, error=str(e))
                continue
            summaries.append(evaluation.summary())

        return _newest_first(summaries)

    def get(self, evaluation_id: str) -> Evaluation:
        if not _VALID_ID.match(evaluation_id or ""):
            raise EvaluationNotFound(evaluation_id)

        path = self._path_for(evaluation_id)
        try:
            with open(path, "r", encoding="utf-8") as fh:
                content = fh.read()
        except FileNotFoundError:
            raise EvaluationNotFound(evaluation_id) from None
        except OSError as e:
            raise StoreError(f"Cannot read evaluation {evaluation_id}: {e}") from e

        try:
            return Evaluation.model_validate_json(content)
        except (ValueError, ValidationError) as e:
            raise StoreError(f"Corrupted evaluation {evaluation_id}: {e}") from e


# -------------------------------------------------------------------
# In-memory store
# -------------------------------------------------------------------

class InMemoryEvaluationStore:
    def __init__(self):
        self._records: Dict[str, Evaluation] = {}
        self._lock = threading.Lock()

    def save(self, evaluation: Evaluation) -> None:
        with self._lock:
            self._records[evaluation.id] = evaluation

    def list(self) -> List[EvaluationSummary]:
        with self._lock:
            records = list(self._records.values())
        return _newest_first([r.summary() for r in records])

    def get(self, evaluation_id: str) -> Evaluation:
        with self._lock:
            evaluation = self._records.get(evaluation_id)
        if evaluation is None:
            raise EvaluationNotFound(evaluation_id)
        return evaluation
