"""Tests for mw_gateway, run against the fake wiki in fakewiki.py."""
