from delver.dungeon import Dungeon, DungeonConfig, generate


def _stable_metrics(d):
    return {k: v for k, v in d.metrics.items() if k not in ("runtime_ms", "phase_ms")}


def test_same_seed_same_dungeon():
    cfg = dict(seed=42, width=15, height=15, room_tries=20)
    runs = [Dungeon(DungeonConfig(**cfg)) for _ in range(3)]
    dumps = [d.to_dict() for d in runs]
    assert dumps[0] == dumps[1] == dumps[2]
    assert _stable_metrics(runs[0]) == _stable_metrics(runs[1])


def test_same_seed_same_dungeon_default_size():
    a = generate(seed=314159)
    b = generate(seed=314159)
    assert a.to_dict() == b.to_dict()


def test_seed_zero_is_deterministic_not_random():
    a = Dungeon(DungeonConfig(seed=0))
    b = Dungeon(DungeonConfig(seed=0))
    assert a.seed == 0
    assert a.to_dict() == b.to_dict()


def test_different_seeds_differ():
    base = Dungeon(DungeonConfig(seed=0)).to_dict()["cells"]
    others = [Dungeon(DungeonConfig(seed=s)).to_dict()["cells"] for s in range(1, 6)]
    assert any(o != base for o in others)


def test_interleaved_generations_do_not_disturb_each_other():
    # Each dungeon owns its random stream; building another in between is harmless
    solo = Dungeon(DungeonConfig(seed=99, width=25, height=25)).to_dict()
    Dungeon(DungeonConfig(seed=5, width=41, height=41, rooms="dense"))
    again = Dungeon(DungeonConfig(seed=99, width=25, height=25)).to_dict()
    assert solo == again


def test_missing_seed_is_resolved_and_reproducible():
    d = Dungeon(DungeonConfig())
    assert isinstance(d.seed, int)
    replay = Dungeon(DungeonConfig(seed=d.seed))
    assert replay.to_dict() == d.to_dict()


def test_reused_config_without_seed_is_left_untouched(monkeypatch):
    from delver.dungeon import pipeline

    seeds = iter([11, 12])
    monkeypatch.setattr(pipeline, "resolve_seed", lambda seed: next(seeds))
    shared = DungeonConfig(width=15, height=15)
    first = Dungeon(shared)
    second = Dungeon(shared)
    assert shared.seed is None
    assert (first.seed, second.seed) == (11, 12)
    assert first.config is not shared
