"""Test suite for the Faculty Rating backend."""
