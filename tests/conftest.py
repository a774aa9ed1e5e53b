"""
Shared fixtures
"""

import pytest

from csvinsight.dataset import make_dataset


@pytest.fixture
def sales_csv():
    return (
        "region,units,price,notes\n"
        "north,10,2.50,first\n"
        "south,4,3.00,\n"
        "north,10,2.50,first\n"
        "east,,1.75,late\n"
        "west,7,abc, \n"
    )


@pytest.fixture
def column_dataset():
    """Build a one-column dataset from a list of cells (None = absent)."""
    def _build(values, name="value"):
        rows = [{} if v is None else {name: v} for v in values]
        return make_dataset([name], rows)
    return _build
