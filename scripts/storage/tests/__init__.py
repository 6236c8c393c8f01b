"""Test suite for the todo app storage backends.

This package contains tests for the storage layer, covering the JSON and
in-memory backends as well as protocol compliance.
"""
