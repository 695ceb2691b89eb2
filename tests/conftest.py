"""Shared fixtures for dispatcher tests."""

import pytest

from cmdtree.interface import Dispatcher
from cmdtree.ui import BufferOutput


@pytest.fixture
def out():
    return BufferOutput()


@pytest.fixture
def calls():
    return []


@pytest.fixture
def make_dispatcher():
    """Factory for dispatchers with status/start/stop and a nested 'net' group."""
    return _build_dispatcher


@pytest.fixture
def dispatcher(calls):
    return _build_dispatcher(calls)


def _build_dispatcher(calls):
    d = Dispatcher()

    @d.command("status", usage="[-v]", description="show status")
    def status(tokens, out):
        calls.append(("status", [t.text for t in tokens], sorted(tokens.flags)))

    @d.command("start", usage="<name>")
    def start(tokens, out):
        """start a service"""
        calls.append(("start", [t.text for t in tokens]))

    @d.command("stop")
    def stop(tokens, out):
        calls.append(("stop", [t.text for t in tokens]))
        return tokens.pop_str() != "fail"

    @d.command("net show")
    def net_show(tokens, out):
        calls.append(("net show", [t.text for t in tokens]))

    @d.command("net set", usage="<value>")
    def net_set(tokens, out):
        value = tokens.pop_uint()
        calls.append(("net set", value))
        return value is not None

    return d
