"""Tests for composite primary keys and indices"""

from core.models import Column, Index, SourceFile
from core.schema.expressions import Expression
from core.schema.parser import parse_declarations
from core.schema.table_extras import extract_index, extract_table_extras


def _expr(code: str) -> Expression:
    declarations = parse_declarations(SourceFile(file_name="test.ts", content=f"const value = {code};"))
    return declarations[0].initializer


def _columns(*names: str) -> dict[str, Column]:
    return {name: Column() for name in names}


class TestIndices:
    """Tests for index declarations"""

    def test_unique_index_keeps_source_order(self) -> None:
        """Test that indexed columns keep their declaration order"""
        index = extract_index(_expr('uniqueIndex("email_org_idx").on(t.email, t.orgId)'))
        assert index == Index(name="email_org_idx", columns=["email", "orgId"], unique=True)

    def test_chained_on_calls(self) -> None:
        """Test that repeated .on() calls are collected in source order"""
        index = extract_index(_expr('index("a_b_idx").on(t.a).on(t.b)'))
        assert index == Index(name="a_b_idx", columns=["a", "b"], unique=False)

    def test_unnamed_index(self) -> None:
        """Test an index without a string name"""
        index = extract_index(_expr("index().on(t.a)"))
        assert index is not None
        assert index.name is None

    def test_not_an_index(self) -> None:
        """Test that other calls are not indices"""
        assert extract_index(_expr('check("positive", sql`a > 0`)')) is None
        assert extract_index(_expr("t.a")) is None


class TestTableExtras:
    """Tests for the table configuration function"""

    def test_array_config(self) -> None:
        """Test composite keys and indices in an array config"""
        columns = _columns("userId", "groupId", "role")
        config = _expr('(t) => [primaryKey({ columns: [t.userId, t.groupId] }), index("role_idx").on(t.role)]')

        indices = extract_table_extras(columns, config)

        assert indices == [Index(name="role_idx", columns=["role"])]
        assert columns["userId"].primary is True
        assert columns["userId"].nullable is False
        assert columns["groupId"].primary is True
        assert columns["role"].primary is None

    def test_object_config(self) -> None:
        """Test the object-returning config form"""
        columns = _columns("a", "b")
        config = _expr(
            '(table) => ({ pk: primaryKey({ columns: [table.a, table.b] }), idx: uniqueIndex("u").on(table.b) })'
        )

        indices = extract_table_extras(columns, config)

        assert indices == [Index(name="u", columns=["b"], unique=True)]
        assert columns["a"].primary is True

    def test_unknown_primary_key_column_ignored(self) -> None:
        """Test that a primary key on a missing column is skipped"""
        columns = _columns("a")
        extract_table_extras(columns, _expr("(t) => [primaryKey({ columns: [t.a, t.missing] })]"))
        assert list(columns) == ["a"]
        assert columns["a"].primary is True

    def test_missing_or_unsupported_config(self) -> None:
        """Test that absent and block-bodied configs yield nothing"""
        assert extract_table_extras(_columns("a"), None) == []
        assert extract_table_extras(_columns("a"), _expr("(t) => { return []; }")) == []
