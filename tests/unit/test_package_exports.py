# tests/unit/test_package_exports.py

import logging

import src.http_orchestrator as orchestrator


def test_version_is_string():
    assert isinstance(orchestrator.__version__, str)
    assert orchestrator.__version__


def test_public_names_exported():
    for name in orchestrator.__all__:
        assert hasattr(orchestrator, name), name


def test_package_logger_has_null_handler():
    handlers = logging.getLogger("http_orchestrator").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
