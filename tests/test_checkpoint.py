import io

import pytest

from kresilience.checkpoint import Member, autodetect_members, checkpoint, latest_version
from kresilience.config import Config
from kresilience.context import ContextBase
from kresilience.filters import NthIterationFilter


class MemoryContext(ContextBase):
    def __init__(self, config=None):
        super().__init__(config if config is not None else Config())
        self.store = {}
        self.registered = []

    def register_hashes(self, members):
        self.registered.append([m.name for m in members])

    def restart_available(self, label, version):
        return (label, version) in self.store

    def restart(self, label, version, members):
        stream = io.BytesIO(self.store[(label, version)])
        for member in members:
            member.deserialize(stream)

    def checkpoint(self, label, version, members):
        stream = io.BytesIO()
        for member in members:
            member.serialize(stream)
        self.store[(label, version)] = stream.getvalue()

    def latest_version(self, label):
        versions = [v for (lbl, v) in self.store if lbl == label]
        return max(versions, default=-1)

    def register_alias(self, original, alias):
        pass

    def reset(self):
        self.store.clear()


def test_member_round_trip_restores_list_in_place():
    values = [1.5, -2.0, 3.25]
    member = Member("values", values)
    stream = io.BytesIO()
    member.serialize(stream)
    values[:] = [0.0, 0.0, 0.0]
    stream.seek(0)
    member.deserialize(stream)
    assert member.value is values
    assert values == [1.5, -2.0, 3.25]


def test_member_round_trip_replaces_immutable_value():
    member = Member("manual_item", 100)
    stream = io.BytesIO()
    member.serialize(stream)
    member.value = 0
    stream.seek(0)
    assert member.deserialize(stream) == 100
    assert member.value == 100


def test_members_compare_by_name():
    assert Member("a", 1) == Member("a", 2)
    assert len({Member("a", 1), Member("a", 2), Member("b", 1)}) == 2


def test_autodetect_finds_mutable_captures_only():
    grid = [[1.0, 2.0], [3.0, 4.0]]
    scale = 2

    def work():
        return grid, scale

    found = autodetect_members(work)
    assert [m.name for m in found] == ["grid"]
    assert found[0].value is grid


def test_autodetect_on_callable_object():
    class Kernel:
        def __init__(self):
            self.data = {"x": 1.0}
            self.count = 3

        def __call__(self):
            return self.data

    kernel = Kernel()
    found = autodetect_members(kernel)
    assert [m.name for m in found] == ["data"]
    assert found[0].value is kernel.data


def test_checkpoint_then_restart_restores_data():
    ctx = MemoryContext()
    data = [1.0, 2.0, 3.0]
    manual = Member("manual_item", 100)

    def work():
        data[:] = [x - 1.0 for x in data]

    checkpoint(ctx, "test_checkpoint", 0, work, manual)
    expected = list(data)

    manual.value = 0
    data[:] = [0.0] * len(data)
    ran = False

    def must_not_run():
        nonlocal ran
        ran = True
        return data

    checkpoint(ctx, "test_checkpoint", 0, must_not_run, manual)
    assert ran is False
    assert data == expected
    assert manual.value == 100


def test_registered_members_are_sorted_and_unique():
    ctx = MemoryContext()
    beta = [1]
    alpha = [2]

    def work():
        return beta, alpha

    checkpoint(ctx, "lbl", 0, work, Member("alpha", alpha))
    assert ctx.registered == [["alpha", "beta"]]


def test_filtered_iteration_only_runs_function():
    ctx = MemoryContext()
    calls = []

    def work():
        calls.append(1)

    checkpoint(ctx, "lbl", 1, work, filter=NthIterationFilter(2))
    assert calls == [1]
    assert ctx.store == {}
    assert ctx.registered == []


def test_default_filter_from_context_config():
    cfg = Config.from_mapping({"filter": {"type": "iteration", "interval": 3}})
    ctx = MemoryContext(cfg)
    data = [0]

    def work():
        data[0] += 1

    for i in range(6):
        checkpoint(ctx, "loop", i, work)
    assert sorted(v for (_, v) in ctx.store) == [0, 3]
    assert data == [6]


def test_latest_version_delegates_to_context():
    ctx = MemoryContext()
    assert latest_version(ctx, "loop") == -1
    checkpoint(ctx, "loop", 4, lambda: None)
    assert latest_version(ctx, "loop") == 4


def test_non_member_explicit_argument_rejected():
    ctx = MemoryContext()
    with pytest.raises(TypeError):
        checkpoint(ctx, "lbl", 0, lambda: None, 42)