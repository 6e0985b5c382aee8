from datetime import time, timedelta

import pytest

from geo_attendance.database.bootstrap import iter_sql_statements
from geo_attendance.database.mysql_base import to_time_of_day


def test_splitter_handles_quotes_and_comments():
    sql = """
    -- tenants; settings
    CREATE TABLE a (x VARCHAR(8) DEFAULT 'a;b');
    INSERT INTO a VALUES ("c;d");
    """
    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x VARCHAR(8) DEFAULT 'a;b')",
        'INSERT INTO a VALUES ("c;d")',
    ]


@pytest.mark.parametrize(
    "value,expected",
    [
        (time(9, 30), time(9, 30)),
        (timedelta(hours=8, minutes=15), time(8, 15)),
        ("07:45:10", time(7, 45, 10)),
        (None, None),
    ],
)
def test_to_time_of_day(value, expected):
    assert to_time_of_day(value) == expected
