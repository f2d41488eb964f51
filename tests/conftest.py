import pytest

from accumulator import Accumulator


def feed(acc, *tokens):
    for token in tokens:
        acc.submit(token)
    return acc


@pytest.fixture
def acc():
    return Accumulator()


@pytest.fixture
def pending_division():
    """5 / with "0" typed as the right operand"""
    return feed(Accumulator(), "5", "/", "0")
