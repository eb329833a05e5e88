from __future__ import annotations


class AssessmentError(Exception):
    """Base class for evaluation service failures."""


class EvaluationNotFound(AssessmentError):
    def __init__(self, evaluation_id: str):
        self.evaluation_id = evaluation_id
        super().__init__(f"Evaluation not found: {evaluation_id}")


class StoreError(AssessmentError):
    """
    The persistence medium could not be read or written
    (missing permissions, full disk, corrupted entry).
    """

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)
