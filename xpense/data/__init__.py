"""Ledger records: normalization, storage, dedup merge, filtering, import."""
from .schemas import Transaction, TransactionFilter, TxType, TypeFilter
from .normalize import build_transaction, classify_type, normalize_amount, normalize_date
from .merge import dedup_key, merge_transactions
from .query import filter_transactions
from .blob import FileBlobStore, MemoryBlobStore
from .store import LedgerStore
from .importer import ImportOutcome, import_file
