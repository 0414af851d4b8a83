"""Tests for the Quote API."""
