import asyncio

from things_api.batch_operations import run_batch
from things_api.data_models import BatchResult


def _run(items, operation, **kwargs):
    return asyncio.run(run_batch(items, operation, **kwargs))


def test_all_succeed():
    async def op(index, item):
        return f"id-{item}"

    result = _run(["a", "b", "c"], op)
    assert (result.total, result.succeeded, result.failed) == (3, 3, 0)
    assert [r.id for r in result.results] == ["id-a", "id-b", "id-c"]
    assert [r.index for r in result.results] == [0, 1, 2]


def test_failure_does_not_stop_batch():
    seen = []

    async def op(index, item):
        seen.append(index)
        if index == 1:
            raise RuntimeError("disk on fire")
        return item

    result = _run(["a", "b", "c"], op, item_id=lambda item: item)
    assert seen == [0, 1, 2]
    assert result.succeeded == 2
    assert result.failed == 1
    failed = result.results[1]
    assert not failed.success
    assert failed.error == "disk on fire"
    assert failed.id == "b"


def test_failed_item_without_id_extractor():
    async def op(index, item):
        raise ValueError("bad")

    result = _run([{"name": "x"}], op)
    assert result.results[0].id is None


def test_empty_batch():
    async def op(index, item):
        return item

    assert _run([], op) == BatchResult(total=0, succeeded=0, failed=0, results=[])


def test_to_dict():
    async def op(index, item):
        return item

    assert _run(["x"], op).to_dict() == {
        "total": 1,
        "succeeded": 1,
        "failed": 0,
        "results": [{"index": 0, "success": True, "id": "x", "error": None}],
    }
