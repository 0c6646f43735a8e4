"""Test suite for oaspec.

This package contains tests for:
- Value casting per schema kind (integer promotion, failure containment)
- Reference normalization and extension-key filtering
- The schema model invariants (required filtering, contract errors)
- Document materialization and the schema resolver
- Every rule validator and the validation pipeline
- The structured diagnostics channel
"""
