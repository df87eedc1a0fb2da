# tests/core/traceability/test_build_record.py
"""
Testes do Build Record v1.

Os testes asseguram que:
- a criação não emite eventos implicitamente
- início/fim/falha de Tasks atualizam estado e Event Log em ordem
- o registro sobrevive a um ciclo save → load sem perdas
"""

from datetime import datetime, timedelta, timezone

from atlas_buildflow.core.traceability.record import (
    BuildRecord,
    add_event,
    create_build_record,
    load_build_record,
    save_build_record,
    set_input,
    task_failed,
    task_finished,
    task_started,
)

T0 = datetime(2026, 1, 16, 12, 0, 0, tzinfo=timezone.utc)


def _record() -> BuildRecord:
    return create_build_record(
        run_id="run-1",
        started_at=T0,
        buildflow_version="0.4.0",
        root_task="default",
        config_hash="deadbeef",
    )


def test_create_has_no_events():
    record = _record()
    assert record.events == []
    assert record.tasks == {}
    assert record.run["root_task"] == "default"
    assert record.inputs == {"config_hash": "deadbeef"}


def test_task_lifecycle_and_duration():
    record = _record()
    task_started(record, task_name="test", kind="quality", ts=T0)
    task_finished(
        record,
        task_name="test",
        ts=T0 + timedelta(milliseconds=1500),
        summary="3 test(s)",
        metrics={"tests": 3},
    )

    entry = record.tasks["test"]
    assert entry["status"] == "success"
    assert entry["duration_ms"] == 1500
    assert entry["metrics"] == {"tests": 3}
    assert [e["type"] for e in record.events] == ["task_started", "task_finished"]


def test_task_failed_keeps_error():
    record = _record()
    task_started(record, task_name="analyze", kind="quality", ts=T0)
    task_failed(record, task_name="analyze", ts=T0, error={"type": "QualityGateFailure", "message": "x"})

    assert record.tasks["analyze"]["status"] == "failed"
    assert record.events[-1]["payload"] == {"error_type": "QualityGateFailure"}


def test_naive_timestamps_are_utc():
    record = create_build_record(
        run_id="r",
        started_at=datetime(2026, 1, 16, 12, 0, 0),
        buildflow_version="0.4.0",
        root_task="build",
        config_hash="h",
    )
    assert record.run["started_at"].endswith("+00:00")


def test_save_load_round_trip(tmp_path):
    record = _record()
    set_input(record, "version", "1.2.3")
    add_event(record, event_type="note", ts=T0, payload={"k": "v"})
    task_started(record, task_name="stage", kind="stage", ts=T0)
    task_finished(record, task_name="stage", ts=T0, summary="ok")

    path = tmp_path / "out" / "build-record.json"
    save_build_record(record, path)
    loaded = load_build_record(path)

    assert loaded.to_dict() == record.to_dict()
