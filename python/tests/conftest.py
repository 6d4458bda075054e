"""
Pytest configuration and fixtures for mapview tests.
"""
import sys
import textwrap
from pathlib import Path

import pytest

PYTHON_ROOT = Path(__file__).resolve().parents[1]
if str(PYTHON_ROOT) not in sys.path:
    sys.path.insert(0, str(PYTHON_ROOT))


SAMPLE_REPORT = textwrap.dedent(
    """\
    *******************************************************************************
    **  TASKING VX-toolset linker/locator map                                    **
    *******************************************************************************

    ******************************** Processed Files ********************************

    +-------------------------------------------------+
    | File   | From archive | Symbol causing the extract |
    |=================================================|
    | main.o |              |                            |
    | obj1.o | libA.a       | foo                        |
    | obj2.o | libA.a       | bar_lo                     |
    |        |              | ng                         |
    +-------------------------------------------------+

    ******************************** Link Result ********************************

    +---------------------------------------------------------------------------------+
    | [in] File | [in] Section | [in] Size (MAU) | [out] Offset | [out] Section | [out] Size (MAU) |
    |=================================================================================|
    | main.o    | .text.main     | 0x40 | 0x0  | .text.main     | 0x40 |
    |---------------------------------------------------------------------------------|
    | main.o    | .data.counter  | 0x4  | 0x0  | .data.counter  | 0x4  |
    |---------------------------------------------------------------------------------|
    | main.o    | .rodata.msg    | 0xc  | 0x0  | .rodata.msg    | 0xc  |
    |---------------------------------------------------------------------------------|
    | obj1.o    | .bss           | 10   | 0    | .bss.obj1      | 10   |
    | obj1.o    | .text          | 20   | 0    | .text.obj1     | 20   |
    |---------------------------------------------------------------------------------|
    | obj2.o    | .bss           | 8    | 0    | .bss.obj2      | 8    |
    | obj2.o    | .text          | 18   | 0    | .text.obj2     | 18   |
    |---------------------------------------------------------------------------------|
    | main.o    | .text.helper_  | 6    | 0    | .text.helper_  | 6    |
    |           | name (13)      |      |      | name (13)      |      |
    +---------------------------------------------------------------------------------+

    ******************************** Locate Result ********************************

    +---------------------------------------------------------------------------------+
    | Chip        | Group | Section        | Size (MAU) | Space addr | Chip addr | Alignment |
    |=================================================================================|
    | mpe:dspr0   | bss   | .bss.obj1      | 10 | 70000000 | 0  | 8  |
    | mpe:dspr0   | bss   | .bss.obj2      | 8  | 70000010 | 10 | 8  |
    | mpe:dspr0   | data  | .data.counter  | 4  | 70000018 | 18 | 4  |
    |---------------------------------------------------------------------------------|
    | mpe:pflash0 | code  | .text.main     | 40 | 80000000 | 0  | 2  |
    | mpe:pflash0 | code  | .text.obj1     | 20 | 80000040 | 40 | 2  |
    | mpe:pflash0 | code  | .text.obj2     | 18 | 80000060 | 60 | 2  |
    | mpe:pflash0 | code  | .text.helper_  | 6  | 80000078 | 78 | 4  |
    |             |       | name (13)      |    |          |    |    |
    | mpe:pflash0 | const | .rodata.msg    | c  | 80000080 | 80 | 10 |
    +---------------------------------------------------------------------------------+

    ******************************** Used Resources ********************************

    +------------------------------------------------------------+
    | Memory      | Code | Data | Reserved | Free  | Total  |
    |============================================================|
    | mpe:dspr0   | 0    | 1c   | 100      | 3ee4  | 4000   |
    | mpe:pflash0 | 86   | c    | 0        | fff6e | 100000 |
    | FLASH       | 100  | 200  | 50       | 150   | 500    |
    |------------------------------------------------------------|
    | Total       | 186  | 228  | 150      | ffff2 | 104500 |
    +------------------------------------------------------------+

    ******************************** Cross References ********************************

    | Definition file | Definition section | Symbol |
    | main.o | .text.main | main |
    """
)


@pytest.fixture
def sample_report() -> str:
    return SAMPLE_REPORT


@pytest.fixture
def sample_report_path(tmp_path) -> Path:
    path = tmp_path / "app.map"
    path.write_text(SAMPLE_REPORT, encoding="utf-8")
    return path


@pytest.fixture
def sample_map(sample_report):
    from mapview.parser import parse_text

    return parse_text(sample_report)
