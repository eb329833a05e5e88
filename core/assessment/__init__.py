"""
Security self-assessment core.

This package defines:
- The answer set, recommendation and evaluation contracts
- Deterministic scoring and score bands
- Evaluation record building with collision-resistant ids
- File-backed and in-memory evaluation stores
- The evaluation service that ties them together
"""
