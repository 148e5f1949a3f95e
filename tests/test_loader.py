"""Tests for loading flow model documents."""

import json

import pytest
import yaml

from sliceflow.model import Actor, Command, Event, ModelError, ModelLoader, StateView
from sliceflow.model.defaults import default_model_filename, get_default_model

from .conftest import ORDER_TIMELINE


class TestLoad:
    def test_load_json(self, model_file):
        model = ModelLoader(model_file).load().model

        assert model.name == "Orders"
        assert model.version == "1.0.0"
        assert [type(e) for e in model.timeline] == [Event, StateView, Actor, Command, Event]
        assert model.timeline[4].produced_by == "ShipOrder-40"
        assert model.specifications == []

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "orders.giraflow.yaml"
        path.write_text(yaml.safe_dump({"name": "Orders", "timeline": ORDER_TIMELINE}))

        model = ModelLoader(path).load().model

        assert model.state_views[0].sourced_from == ["OrderPlaced"]

    def test_snake_case_is_accepted(self):
        model = ModelLoader.from_dict({
            "timeline": [
                {"type": "actor", "name": "A", "tick": 1, "reads_view": "V", "sends_command": "C"},
            ],
        }).model

        assert model.actors[0].reads_view == "V"

    def test_schema_reference(self):
        model = ModelLoader.from_dict(get_default_model("Demo")).model

        assert model.schema_ref == "giraflow.schema.json"
        assert model.name == "Demo"


class TestErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ModelError, match="does not exist"):
            ModelLoader(tmp_path / "missing.giraflow.json").load()

    def test_no_path(self):
        with pytest.raises(ModelError, match="No model path"):
            ModelLoader().load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.giraflow.json"
        path.write_text("{ not json")

        with pytest.raises(ModelError, match="Invalid JSON"):
            ModelLoader(path).load()

    def test_top_level_must_be_an_object(self, tmp_path):
        path = tmp_path / "list.giraflow.json"
        path.write_text("[]")

        with pytest.raises(ModelError, match="Expected an object"):
            ModelLoader(path).load()

    def test_unknown_element_type(self):
        with pytest.raises(ModelError, match="Invalid flow model"):
            ModelLoader.from_dict({"timeline": [{"type": "policy", "name": "P", "tick": 1}]})

    def test_missing_tick(self):
        with pytest.raises(ModelError):
            ModelLoader.from_dict({"timeline": [{"type": "event", "name": "E"}]})

    def test_negative_tick(self):
        with pytest.raises(ModelError, match="Invalid flow model"):
            ModelLoader.from_dict({"timeline": [{"type": "command", "name": "Ship", "tick": -5}]})

    def test_missing_timeline(self):
        with pytest.raises(ModelError):
            ModelLoader.from_dict({"name": "Empty"})

    def test_save_without_model(self, tmp_path):
        with pytest.raises(ModelError, match="No model loaded"):
            ModelLoader().save(tmp_path / "out.giraflow.json")


class TestSave:
    def test_save_writes_camel_case_json(self, tmp_path):
        loader = ModelLoader.from_dict(get_default_model("Demo"))

        path = loader.save(tmp_path / "demo.giraflow.json")
        data = json.loads(path.read_text(encoding="utf-8"))

        assert data["$schema"] == "giraflow.schema.json"
        assert data["timeline"][1]["readsView"] == "InitialState"
        assert data["timeline"][3]["producedBy"] == "DoSomething-3"

    def test_save_yaml(self, tmp_path):
        loader = ModelLoader.from_dict(get_default_model("Demo"))

        path = loader.save(tmp_path / "demo.giraflow.yml")

        assert yaml.safe_load(path.read_text(encoding="utf-8"))["name"] == "Demo"


def test_default_model_filename():
    assert default_model_filename("Hotel Booking") == "hotel-booking.giraflow.json"
    assert default_model_filename("  ") == "model.giraflow.json"
