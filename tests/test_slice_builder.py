"""Tests for the full slice view-model build."""

import threading

from sliceflow.builder import (
    TIMELINE_SCENARIO_NAME,
    SliceBuilder,
    TimelineScenario,
    build_slice_view_model,
    group_actors_by_name,
)
from sliceflow.model import CommandScenario, FlowModel, StateViewScenario

from .conftest import ORDER_TIMELINE, make_model

SPECIFICATIONS = [
    {
        "type": "state",
        "name": "PendingOrders",
        "scenarios": [
            {
                "name": "Empty to one order",
                "initialState": {"orders": []},
                "steps": [{"given": {"event": "OrderPlaced", "data": {"orderId": 7}}, "then": {"orders": [7]}}],
            },
        ],
    },
    {
        "type": "command",
        "name": "ShipOrder",
        "scenarios": [
            {
                "name": "Ships a placed order",
                "steps": [
                    {"type": "events-only", "events": [{"event": "OrderPlaced"}]},
                    {"type": "command", "when": {"orderId": 7}, "produces": [{"event": "OrderShipped"}]},
                ],
            },
            {
                "name": "Rejects unknown order",
                "steps": [{"type": "command", "when": {"orderId": 9}, "fails": "Order not found"}],
            },
        ],
    },
]


class TestBuild:
    def test_order_model(self, order_model):
        view_model = build_slice_view_model(order_model)

        pending = view_model.get_slice("state", "PendingOrders")
        ship = view_model.get_slice("command", "ShipOrder")

        assert [s.key for s in view_model.slices] == ["state:PendingOrders", "command:ShipOrder"]
        assert pending.example == {"orders": [1]}
        assert isinstance(pending.scenarios[0], StateViewScenario)
        assert pending.scenarios[0].steps[0].given.event == "OrderPlaced"
        assert isinstance(ship.scenarios[0], TimelineScenario)
        assert ship.spec_scenario_count == 0

    def test_actors_pass_through(self, order_model):
        view_model = build_slice_view_model(order_model)

        assert [a.name for a in view_model.actors] == ["Worker"]
        assert view_model.actors[0].reads_view == "PendingOrders"

    def test_empty_timeline(self):
        view_model = build_slice_view_model(make_model([]))

        assert view_model.slices == ()
        assert view_model.actors == ()

    def test_dangling_reference_does_not_fail(self):
        view_model = build_slice_view_model(make_model([
            {"type": "state", "name": "Ghosts", "tick": 5, "sourcedFrom": ["NeverHappened"]},
        ]))

        ghosts = view_model.slices[0]
        assert ghosts.sourced_from[0].name == "NeverHappened"
        assert ghosts.sourced_from[0].ticks == ()
        assert len(ghosts.scenarios) == 1

    def test_slice_builder_class(self, order_model):
        assert SliceBuilder(order_model).build() == build_slice_view_model(order_model)


class TestSpecifications:
    def test_declared_scenarios_follow_the_timeline_scenario(self):
        view_model = build_slice_view_model(make_model(ORDER_TIMELINE, SPECIFICATIONS))
        ship = view_model.get_slice("command", "ShipOrder")

        assert [s.name for s in ship.scenarios] == [
            TIMELINE_SCENARIO_NAME,
            "Ships a placed order",
            "Rejects unknown order",
        ]
        assert ship.spec_scenario_count == 2
        assert isinstance(ship.timeline_scenario, TimelineScenario)
        assert all(isinstance(s, CommandScenario) for s in ship.spec_scenarios)

    def test_state_specification(self):
        view_model = build_slice_view_model(make_model(ORDER_TIMELINE, SPECIFICATIONS))
        pending = view_model.get_slice("state", "PendingOrders")

        assert pending.spec_scenario_count == 1
        assert pending.scenarios[1].initial_state == {"orders": []}

    def test_unmatched_specification_is_dropped(self):
        timeline = [e for e in ORDER_TIMELINE if e["type"] != "command"]
        view_model = build_slice_view_model(make_model(timeline, SPECIFICATIONS))

        assert view_model.get_slice("command", "ShipOrder") is None
        assert [s.key for s in view_model.slices] == ["state:PendingOrders"]

    def test_type_must_match(self):
        specs = [{"type": "command", "name": "PendingOrders", "scenarios": [{"name": "Wrong type"}]}]
        view_model = build_slice_view_model(make_model(ORDER_TIMELINE, specs))

        assert view_model.get_slice("state", "PendingOrders").spec_scenario_count == 0

    def test_repeated_specifications_keep_declared_order(self):
        specs = [
            {"type": "command", "name": "ShipOrder", "scenarios": [{"name": "one"}]},
            {"type": "command", "name": "ShipOrder", "scenarios": [{"name": "two"}, {"name": "three"}]},
        ]
        ship = build_slice_view_model(make_model(ORDER_TIMELINE, specs)).get_slice("command", "ShipOrder")

        assert [s.name for s in ship.spec_scenarios] == ["one", "two", "three"]

    def test_null_specifications_section(self):
        model = FlowModel.model_validate({"timeline": ORDER_TIMELINE, "specifications": None})

        assert build_slice_view_model(model).slices[0].spec_scenario_count == 0

    def test_scenario_count_invariant(self):
        view_model = build_slice_view_model(make_model(ORDER_TIMELINE, SPECIFICATIONS))

        for slice_ in view_model.slices:
            synthesized = 1 if slice_.occurrence_count else 0
            assert slice_.scenarios[0].name == TIMELINE_SCENARIO_NAME
            assert slice_.spec_scenario_count == len(slice_.scenarios) - synthesized


class TestPurity:
    def test_build_is_idempotent(self, recurring_model):
        assert build_slice_view_model(recurring_model) == build_slice_view_model(recurring_model)

    def test_input_is_not_mutated(self):
        model = make_model(ORDER_TIMELINE, SPECIFICATIONS)
        before = model.model_dump()

        build_slice_view_model(model)

        assert model.model_dump() == before

    def test_output_does_not_share_payloads_with_input(self, order_model):
        view_model = build_slice_view_model(order_model)

        view_model.slices[0].example["orders"].append(99)

        assert order_model.timeline[1].example == {"orders": [1]}

    def test_concurrent_builds(self, recurring_model):
        expected = build_slice_view_model(recurring_model)
        results = []

        def run():
            results.append(build_slice_view_model(recurring_model))

        threads = [threading.Thread(target=run) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == [expected] * 4


class TestHelpers:
    def test_reading_and_triggering_actors(self, order_model):
        view_model = build_slice_view_model(order_model)

        assert [a.name for a in view_model.reading_actors("PendingOrders")] == ["Worker"]
        assert [a.name for a in view_model.triggering_actors("ShipOrder")] == ["Worker"]
        assert view_model.reading_actors("ShipOrder") == []

    def test_group_actors_by_name(self):
        model = make_model([
            {"type": "actor", "name": "Clerk", "tick": 1, "readsView": "V", "sendsCommand": "C", "role": "staff"},
            {"type": "actor", "name": "Guest", "tick": 2, "readsView": "V", "sendsCommand": "C"},
            {"type": "actor", "name": "Clerk", "tick": 3, "readsView": "V", "sendsCommand": "C", "role": "boss"},
        ])

        grouped = group_actors_by_name(model.actors)

        assert [(g.name, g.ticks, g.role) for g in grouped] == [
            ("Clerk", (1, 3), "staff"),
            ("Guest", (2,), None),
        ]
