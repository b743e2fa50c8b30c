from xpense.data.merge import dedup_key, merge_transactions


def test_duplicate_candidates_in_one_batch_keep_first(make_tx):
    first = make_tx(desc="Coffee")
    second = make_tx(desc="Coffee")
    merged = merge_transactions([], [first, second])
    assert merged == [first]


def test_candidates_matching_existing_records_are_dropped(make_tx):
    existing = [make_tx(date="2024-01-01", desc="Rent", amount=100)]
    again = make_tx(date="2024-01-01", desc="Rent", amount=100)
    new = make_tx(date="2024-01-02", desc="Rent", amount=100)

    merged = merge_transactions(existing, [again, new])

    assert merged == existing + [new]


def test_key_covers_every_field_but_id(make_tx):
    a = make_tx(type="expense")
    b = make_tx(type="income")
    c = make_tx(category="Drinks")
    assert dedup_key(a) != dedup_key(b)
    assert dedup_key(a) != dedup_key(c)
    assert dedup_key(a) == dedup_key(make_tx())


def test_existing_records_are_never_dropped(make_tx):
    twin = make_tx()
    existing = [twin, make_tx()]
    merged = merge_transactions(existing, [])
    assert len(merged) == 2


def test_merging_the_same_batch_twice_is_idempotent(make_tx, sample_transactions):
    once = merge_transactions([], sample_transactions)
    reimported = [make_tx(**{k: v for k, v in tx.to_dict().items() if k != "id"}) for tx in sample_transactions]
    twice = merge_transactions(once, reimported)
    assert twice == once
