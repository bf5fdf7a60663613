# ABOUTME: Tests for core.config env parsing helpers.

import logging

from core.config import _parse_log_level, _parse_max_batch_size


def test_log_level_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert _parse_log_level() == logging.DEBUG


def test_invalid_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert _parse_log_level() == logging.INFO


def test_max_batch_size_from_env(monkeypatch):
    monkeypatch.setenv("MAX_BATCH_SIZE", "50")
    assert _parse_max_batch_size() == 50


def test_max_batch_size_falls_back_on_bad_value(monkeypatch):
    monkeypatch.setenv("MAX_BATCH_SIZE", "lots")
    assert _parse_max_batch_size() == 200
    monkeypatch.setenv("MAX_BATCH_SIZE", "0")
    assert _parse_max_batch_size() == 200
