"""
Default model values and templates.

Provides the starter document written by ``sliceflow init``.
"""

from typing import Dict, Any

SCHEMA_REF = "giraflow.schema.json"
MODEL_SUFFIX = ".giraflow.json"


def get_default_model(name: str = "New Model") -> Dict[str, Any]:
    """Get a starter model: one state view, actor, command and event."""
    return {
        "$schema": SCHEMA_REF,
        "name": name,
        "description": "Start building your information flow model here",
        "version": "1.0.0",
        "timeline": [
            {
                "type": "state",
                "name": "InitialState",
                "tick": 1,
                "sourcedFrom": [],
                "example": {},
            },
            {
                "type": "actor",
                "name": "User",
                "tick": 2,
                "readsView": "InitialState",
                "sendsCommand": "DoSomething",
            },
            {
                "type": "command",
                "name": "DoSomething",
                "tick": 3,
                "example": {"data": "example"},
            },
            {
                "type": "event",
                "name": "SomethingHappened",
                "tick": 4,
                "producedBy": "DoSomething-3",
                "example": {"result": "success"},
            },
        ],
        "specifications": [],
    }


def default_model_filename(name: str) -> str:
    """Turn a model name into ``my-model.giraflow.json``."""
    slug = "-".join(name.strip().lower().split()) or "model"
    return f"{slug}{MODEL_SUFFIX}"
