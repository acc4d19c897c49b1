"""Tests for the barter simulator."""
