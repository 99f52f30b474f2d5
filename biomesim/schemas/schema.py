from typing import Any, Dict
_PROBABILITY = {"type": "number", "minimum": 0.0, "maximum": 1.0}
_TERRAIN_RATES = {
    "type": "object",
    "properties": {"resource": _PROBABILITY, "land": _PROBABILITY},
    "additionalProperties": False,
}
_SEED_ENTRY = {
    "type": "object",
    "required": ["probability", "max_population"],
    "properties": {
        "probability": _PROBABILITY,
        "max_population": {"type": "integer", "minimum": 1},
    },
    "additionalProperties": False,
}
def get_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "required": ["world"],
        "properties": {
            "world": {
                "type": "object",
                "required": ["width", "height"],
                "properties": {
                    "type": {"type": "string", "enum": ["grid"]},
                    "width": {"type": "integer", "minimum": 1},
                    "height": {"type": "integer", "minimum": 1},
                },
            },
            "generation": {
                "type": "object",
                "properties": {"smoothing_passes": {"type": "integer", "minimum": 0}},
            },
            "randomness": {
                "type": "object",
                "properties": {"seed": {"type": ["integer", "null"], "minimum": 0}},
            },
            "seeding": {
                "type": "object",
                "properties": {"resource": _SEED_ENTRY, "land": _SEED_ENTRY},
                "additionalProperties": False,
            },
            "dynamics": {
                "type": "object",
                "properties": {
                    "growth": _TERRAIN_RATES,
                    "shrink": _TERRAIN_RATES,
                    "migration": {
                        "type": "object",
                        "properties": {"probability": _PROBABILITY},
                    },
                    "fraction": _PROBABILITY,
                    "extinguish_threshold": {"type": "integer", "minimum": 0},
                },
            },
            "outputs": {
                "type": "object",
                "properties": {"metrics_cadence": {"type": "integer", "minimum": 1}},
            },
        },
    }
