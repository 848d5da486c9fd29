"""
Serialization helpers for the family model.

Provides lossless JSON/YAML round-trip via intermediate dict representation.
Capabilities are stored sorted by value so the output is stable.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from tuplegen.model import ArityModel, Capability, ExtensionPolicy, FamilyModel


def arity_to_dict(m: ArityModel) -> Dict[str, Any]:
    return {
        "arity": m.arity,
        "interface_name": m.interface_name,
        "class_name": m.class_name,
        "labels": list(m.labels),
        "type_params": list(m.type_params),
        "ordinals": list(m.ordinals),
        "capabilities": sorted(c.value for c in m.capabilities),
        "extension": m.extension.value,
    }


def arity_from_dict(d: Dict[str, Any]) -> ArityModel:
    return ArityModel(
        arity=d["arity"],
        interface_name=d["interface_name"],
        class_name=d["class_name"],
        labels=tuple(d.get("labels", [])),
        type_params=tuple(d.get("type_params", [])),
        ordinals=tuple(d.get("ordinals", [])),
        capabilities=frozenset(Capability(c) for c in d.get("capabilities", [])),
        extension=ExtensionPolicy(d.get("extension", ExtensionPolicy.TYPED.value)),
    )


def family_to_dict(f: FamilyModel) -> Dict[str, Any]:
    return {
        "max_arity": f.max_arity,
        "members": [arity_to_dict(m) for m in f.members],
    }


def family_from_dict(d: Dict[str, Any]) -> FamilyModel:
    """Rebuild a FamilyModel. Its invariants are re-checked on construction."""
    return FamilyModel(
        max_arity=d["max_arity"],
        members=tuple(arity_from_dict(m) for m in d.get("members", [])),
    )


def family_to_json(f: FamilyModel) -> str:
    return json.dumps(family_to_dict(f), sort_keys=True)


def family_from_json(s: str) -> FamilyModel:
    d = json.loads(s)
    return family_from_dict(d)


def family_to_yaml(f: FamilyModel) -> str:
    return yaml.safe_dump(family_to_dict(f), sort_keys=False)


def family_from_yaml(s: str) -> FamilyModel:
    d = yaml.safe_load(s)
    return family_from_dict(d)
