from __future__ import annotations

import uuid

import pytest

from catalog_merge.domain.merging import MergeResult, MergeStats, NotFoundError
from catalog_merge.domain.model import EntityKind
from catalog_merge.ui import cli as cli_module


def test_merge_command_passes_parsed_ids(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    source_id, target_id = uuid.uuid4(), uuid.uuid4()

    def fake_merge(kind: str, source: uuid.UUID, target: uuid.UUID) -> MergeResult:
        captured.update(kind=kind, source=source, target=target)
        return MergeResult.succeeded(target, MergeStats(), frozenset())

    monkeypatch.setattr(cli_module, "merge_entities", fake_merge)

    cli_module.main(
        ["merge", "--kind", "artist", "--source", str(source_id), "--target", str(target_id)]
    )

    assert captured == {"kind": "artist", "source": source_id, "target": target_id}


def test_merge_command_rejects_invalid_uuid(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_merge(*_: object, **__: object) -> MergeResult:
        raise AssertionError("merge must not run")

    monkeypatch.setattr(cli_module, "merge_entities", fake_merge)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(
            ["merge", "--kind", "album", "--source", "not-a-uuid", "--target", str(uuid.uuid4())]
        )

    assert excinfo.value.code == 2


def test_merge_command_rejects_unknown_kind() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(
            ["merge", "--kind", "label", "--source", str(uuid.uuid4()), "--target", "x"]
        )

    assert excinfo.value.code == 2


def test_failed_merge_exits_with_status_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_merge(*_: object, **__: object) -> MergeResult:
        return MergeResult.failed(NotFoundError("Source song not found"))

    monkeypatch.setattr(cli_module, "merge_entities", fake_merge)

    source_id, target_id = uuid.uuid4(), uuid.uuid4()

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(
            ["merge", "--kind", "song", "--source", str(source_id), "--target", str(target_id)]
        )

    assert excinfo.value.code == 1


def test_check_plans_exits_with_status_one_on_gaps(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        cli_module,
        "check_merge_plans",
        lambda: {EntityKind.SONG: frozenset({("track", "song_id")})},
    )

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["check-plans"])

    assert excinfo.value.code == 1


def test_check_plans_succeeds_for_default_plans() -> None:
    cli_module.main(["check-plans"])
