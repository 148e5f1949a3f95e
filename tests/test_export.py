"""Tests for slice JSON export."""

import json
from pathlib import Path

from sliceflow.builder import (
    build_slice_view_model,
    download_name,
    export_slices_to_json,
    slices_output_path,
    write_slices,
)

from .conftest import ORDER_TIMELINE, make_model


def test_export_shape(order_model):
    data = json.loads(export_slices_to_json(build_slice_view_model(order_model).slices))

    pending, ship = data
    assert pending["name"] == "PendingOrders"
    assert pending["type"] == "state"
    assert pending["ticks"] == [20]
    assert pending["sourcedFrom"] == [{"name": "OrderPlaced", "ticks": [10]}]
    assert pending["stateOccurrences"][0]["state"]["sourcedFrom"] == ["OrderPlaced"]
    assert pending["scenarios"][0]["steps"][0]["given"] == {"event": "OrderPlaced", "data": {"orderId": 1}}
    assert pending["specScenarioCount"] == 0

    assert ship["produces"] == [{"name": "OrderShipped", "ticks": [50]}]
    assert ship["commandOccurrences"][0]["producedEvents"][0]["producedBy"] == "ShipOrder-40"
    assert [row["type"] for row in ship["scenarios"][0]["rows"]] == ["events-only", "command"]
    assert ship["scenarios"][0]["rows"][1]["command"] == {"name": "ShipOrder", "data": {"orderId": 1}}


def test_export_keeps_dangling_refs():
    model = make_model([{"type": "state", "name": "Ghosts", "tick": 1, "sourcedFrom": ["NeverHappened"]}])
    data = json.loads(export_slices_to_json(build_slice_view_model(model).slices))

    assert data[0]["sourcedFrom"] == [{"name": "NeverHappened", "ticks": []}]
    assert "example" not in data[0]


def test_export_keeps_non_ascii():
    model = make_model([{"type": "command", "name": "Bestellen", "tick": 1, "example": {"größe": "groß"}}])

    assert "groß" in export_slices_to_json(build_slice_view_model(model).slices)


def test_view_model_to_dict_includes_actors(order_model):
    data = build_slice_view_model(order_model).to_dict()

    assert data["actors"][0]["readsView"] == "PendingOrders"
    assert len(data["slices"]) == 2


def test_slices_output_path():
    assert slices_output_path("models/hotel.giraflow.json") == Path("models/hotel.giraflow/slices.json")
    assert slices_output_path("hotel.giraflow.yaml") == Path("hotel.giraflow/slices.json")


def test_download_name():
    assert download_name("models/hotel.giraflow.json") == "hotel.giraflow-slices.json"
    assert download_name("notes.json") == "slices.giraflow-slices.json"


def test_write_slices(tmp_path):
    model_path = tmp_path / "orders.giraflow.json"
    view_model = build_slice_view_model(make_model(ORDER_TIMELINE))

    written = write_slices(view_model, model_path)

    assert written == tmp_path / "orders.giraflow" / "slices.json"
    assert [s["name"] for s in json.loads(written.read_text(encoding="utf-8"))] == ["PendingOrders", "ShipOrder"]
