#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
from typing import Any, Callable


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def make_chain() -> Callable[..., Any]:
    """Fixture to build a linked chain of n instances of cls, nested through the attr field."""

    def _make_chain(cls: type, n: int, attr: str = "next") -> Any:
        head = None
        for _ in range(n):
            node = cls()
            setattr(node, attr, head)
            head = node
        return head

    return _make_chain


@pytest.fixture
def make_cycle() -> Callable[..., Any]:
    """Fixture to build an instance of cls referencing itself through the attr field."""

    def _make_cycle(cls: type, attr: str = "next") -> Any:
        node = cls()
        setattr(node, attr, node)
        return node

    return _make_cycle
