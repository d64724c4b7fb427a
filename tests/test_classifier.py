import pytest

from sql_playground.core.errors import EmptyStatementError, ValidationError
from sql_playground.core.sql.classifier import classify, extract_table_name


def test_select_is_read():
    """Lowercase select is a read and the FROM target is picked up"""
    statement = classify("select * from Foo")
    assert statement.is_read
    assert statement.table_name == "Foo"


def test_insert_is_mutation():
    statement = classify("INSERT INTO bar VALUES (1)")
    assert not statement.is_read
    assert statement.table_name == "bar"
    assert statement.verb == "INSERT"


def test_pragma_has_no_table():
    statement = classify("PRAGMA table_info(x)")
    assert not statement.is_read
    assert statement.table_name is None


def test_surrounding_whitespace_is_trimmed():
    statement = classify("  \n SELECT 1 \t")
    assert statement.text == "SELECT 1"
    assert statement.is_read


@pytest.mark.parametrize("sql", ["", "   ", "\n\t", None])
def test_empty_statement_rejected(sql):
    with pytest.raises(EmptyStatementError) as exc_info:
        classify(sql)
    assert isinstance(exc_info.value, ValidationError)
    assert exc_info.value.status_code == 400


def test_quoted_table_name_is_unquoted():
    assert extract_table_name("INSERT INTO 'people' VALUES (1)") == "people"
    assert extract_table_name('DELETE FROM "people"') == "people"


def test_leftmost_keyword_wins():
    """Only the first FROM/INTO/TABLE counts, joins are not understood"""
    sql = "SELECT * FROM orders JOIN customers ON orders.cid = customers.id"
    assert extract_table_name(sql) == "orders"
    assert extract_table_name("INSERT INTO archive SELECT * FROM orders") == "archive"


def test_table_creation_detection():
    assert classify("CREATE TABLE foo (id INTEGER)").is_table_creation
    assert classify("create temp table foo (id INTEGER)").is_table_creation
    assert not classify("CREATE INDEX idx ON foo (id)").is_table_creation
    assert not classify("DROP TABLE foo").is_table_creation


def test_select_prefix_only_by_text():
    """WITH ... SELECT does not start with SELECT, so it takes the mutation route"""
    assert not classify("WITH t AS (SELECT 1) SELECT * FROM t").is_read
