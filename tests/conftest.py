"""Shared fixtures: small order-shipping flow models."""

import copy
import json

import pytest

from sliceflow.model import FlowModel

ORDER_TIMELINE = [
    {"type": "event", "name": "OrderPlaced", "tick": 10, "example": {"orderId": 1}},
    {
        "type": "state",
        "name": "PendingOrders",
        "tick": 20,
        "sourcedFrom": ["OrderPlaced"],
        "example": {"orders": [1]},
    },
    {
        "type": "actor",
        "name": "Worker",
        "tick": 30,
        "readsView": "PendingOrders",
        "sendsCommand": "ShipOrder",
        "role": "warehouse",
    },
    {"type": "command", "name": "ShipOrder", "tick": 40, "example": {"orderId": 1}},
    {
        "type": "event",
        "name": "OrderShipped",
        "tick": 50,
        "producedBy": "ShipOrder-40",
        "example": {"orderId": 1},
    },
]


def make_model(timeline, specifications=None, **extra) -> FlowModel:
    data = {"name": "Orders", "timeline": copy.deepcopy(timeline), **extra}
    if specifications is not None:
        data["specifications"] = copy.deepcopy(specifications)
    return FlowModel.model_validate(data)


@pytest.fixture
def order_timeline():
    return copy.deepcopy(ORDER_TIMELINE)


@pytest.fixture
def order_model():
    return make_model(ORDER_TIMELINE)


@pytest.fixture
def recurring_model():
    """PendingOrders shows up again at tick 70 with an extra source."""
    timeline = copy.deepcopy(ORDER_TIMELINE) + [
        {
            "type": "state",
            "name": "PendingOrders",
            "tick": 70,
            "sourcedFrom": ["OrderShipped", "OrderCancelled"],
            "example": {"orders": []},
        },
    ]
    return make_model(timeline)


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "orders.giraflow.json"
    path.write_text(json.dumps({"name": "Orders", "version": "1.0.0", "timeline": ORDER_TIMELINE}))
    return path
