"""Shared fixtures for core unit tests"""

import pytest

from litweave.core.extract.extractor import BlockExtractor
from litweave.core.macros import MacroTable


SAMPLE_CS = """\
/*
# Sample
Intro text.
*/
using System;

/* A class. */
class Greeter
{
\t#region greet
\tvoid Greet() { }
\t#endregion
}
"""

NESTED_CS = """\
#region outer
int a;
/* between */
#region inner
int b;
#endregion
int c;
#endregion
int d;
"""


@pytest.fixture(name="table")
def table_fixture():
    return MacroTable()


@pytest.fixture(name="extract")
def extract_fixture(table):
    """Extract source text into blocks, registering regions in the shared table."""
    def _extract(source: str, **kwargs):
        return BlockExtractor(table, **kwargs).from_source(source)
    return _extract


@pytest.fixture(name="sample_cs")
def sample_cs_fixture():
    return SAMPLE_CS


@pytest.fixture(name="nested_cs")
def nested_cs_fixture():
    return NESTED_CS
