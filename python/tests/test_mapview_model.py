"""Tests for the model transport form."""

from __future__ import annotations

import json

from mapview.classify import SectionCategory, SectionNames
from mapview.model import LinkerMap


def test_to_dict_uses_transport_keys(sample_map):
    payload = sample_map.to_dict()
    assert set(payload) == {"processedFiles", "linkResult", "locateResult", "usedResources"}
    assert payload["processedFiles"][0] == {"name": "main.o"}
    assert payload["processedFiles"][1] == {"name": "obj1.o", "archiveName": "libA.a", "extractSymbol": "foo"}
    section = payload["linkResult"][0]["sections"][0]
    assert section == {
        "type": "text",
        "in": {"section": ".text.main", "size": 0x40},
        "out": {"offset": 0, "section": ".text.main", "size": 0x40},
    }
    assert payload["locateResult"][0]["spaceAddr"] == 0x70000000


def test_json_transport_rebuilds_model(sample_map):
    restored = LinkerMap.from_dict(json.loads(json.dumps(sample_map.to_dict())))
    assert restored == sample_map


def test_from_dict_rederives_categories(sample_map):
    names = SectionNames.from_lists(data=".rodata")
    restored = LinkerMap.from_dict(sample_map.to_dict(), names)
    assert restored.link_result[0].sections[2].category is SectionCategory.DATA

