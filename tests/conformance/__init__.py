"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the lattice engine and cursors.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. test_lattice_properties.py - Normalization, symmetry, expectation identities
2. test_cursor_properties.py - Cursor algebra (take, drop, size, accumulate)

These tests use hypothesis for property-based testing.
"""
