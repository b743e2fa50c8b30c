import pytest

from xpense.data.blob import MemoryBlobStore
from xpense.data.normalize import build_transaction
from xpense.data.store import LedgerStore


def _make_tx(**kwargs):
    base = dict(
        date="2024-01-15",
        desc="Coffee",
        category="Food",
        type="expense",
        amount=3.5,
    )
    base.update(kwargs)
    tx_id = base.pop("id", None)
    return build_transaction(base, tx_id=tx_id, allow_negative=True)


@pytest.fixture
def make_tx():
    return _make_tx


@pytest.fixture
def blob():
    return MemoryBlobStore()


@pytest.fixture
def store(blob):
    return LedgerStore(blob).load()


@pytest.fixture
def sample_transactions():
    return [
        _make_tx(date="2024-01-05", desc="Rent", category="Housing", type="expense", amount=100),
        _make_tx(date="2024-01-10", desc="Salary", category="Job", type="income", amount=50),
        _make_tx(date="2024-02-01", desc="Lunch", category="Food", type="expense", amount=20),
    ]
