"""Tests for pg_seqcheck."""
