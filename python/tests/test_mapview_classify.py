"""Tests for section-type classification."""

from __future__ import annotations

import pytest

from mapview.classify import (
    DEFAULT_SECTION_NAMES,
    SectionCategory,
    SectionNames,
    classify,
    parse_name_list,
    section_family,
)


@pytest.mark.parametrize(
    "name, family",
    [
        (".bss.fast", ".bss"),
        (".bss", ".bss"),
        (".text.main.helper", ".text"),
        (".text (cont)", ".text"),
        (".text.helper_name (13)", ".text"),
        ("", ""),
    ],
)
def test_section_family(name, family):
    assert section_family(name) == family


def test_default_names_classify_builtin_families():
    assert classify(".bss.counter") is SectionCategory.BSS
    assert classify(".data.table") is SectionCategory.DATA
    assert classify(".text.main") is SectionCategory.TEXT
    assert classify(".rodata.msg") is SectionCategory.OTHER
    assert classify(".bssx.foo") is SectionCategory.OTHER


def test_configured_names_are_checked_bss_data_text_in_order():
    names = SectionNames.from_lists(bss=".zbss, .shared", data=".shared", text=".shared")
    assert classify(".shared.buf", names) is SectionCategory.BSS
    assert classify(".zbss.buf", names) is SectionCategory.BSS
    assert classify(".bss.buf", names) is SectionCategory.OTHER


def test_parse_name_list_trims_and_deduplicates():
    assert parse_name_list(" .bss , .sbss,.bss,, ") == (".bss", ".sbss")
    assert parse_name_list([".data", " .ldata "]) == (".data", ".ldata")


def test_defaults():
    assert DEFAULT_SECTION_NAMES.bss == (".bss",)
    assert DEFAULT_SECTION_NAMES.data == (".data",)
    assert DEFAULT_SECTION_NAMES.text == (".text",)
