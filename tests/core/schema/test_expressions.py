"""Tests for expression shapes and call-chain unwinding"""

from core.schema.expressions import (
    BooleanLiteral,
    Call,
    CallFrame,
    Identifier,
    NumberLiteral,
    ObjectLiteral,
    Parenthesized,
    PropertyAccess,
    StringLiteral,
    call_chain,
    callee_name,
    is_true,
    member_name,
    root_call,
    unwrap_parens,
)


def _method(receiver: Call, name: str, *args: object) -> Call:
    return Call(callee=PropertyAccess(object=receiver, name=name), args=tuple(args))  # type: ignore[arg-type]


class TestCallChain:
    """Tests for call_chain"""

    def test_frames_run_outermost_to_innermost(self) -> None:
        """Test that a chain unwinds from the last call back to the root"""
        root = Call(callee=Identifier(name="uuid"), args=(StringLiteral(value="id"),))
        expr = _method(_method(root, "primaryKey"), "default", NumberLiteral(value=1))

        frames = call_chain(expr)

        assert [frame.name for frame in frames] == ["default", "primaryKey", "uuid"]
        assert frames[0].args == (NumberLiteral(value=1),)
        assert frames[0].is_method is True
        assert frames[-1] == CallFrame("uuid", (StringLiteral(value="id"),), is_method=False)

    def test_non_call_yields_no_frames(self) -> None:
        """Test that a plain identifier is not a chain"""
        assert call_chain(Identifier(name="users")) == []
        assert call_chain(None) == []

    def test_member_receiver_stops_unwinding(self) -> None:
        """Test that helpers.one(...) becomes a single method frame"""
        expr = Call(callee=PropertyAccess(object=Identifier(name="helpers"), name="one"), args=())

        frames = call_chain(expr)

        assert frames == [CallFrame("one", (), is_method=True)]
        assert root_call(frames) is None

    def test_unrecognized_callee_gives_unnamed_frame(self) -> None:
        """Test that a call on a non-identifier callee is kept without a name"""
        inner = Call(callee=Parenthesized(expression=Identifier(name="f")), args=())

        frames = call_chain(inner)

        assert frames == [CallFrame(None, (), is_method=False)]
        assert root_call(frames) is None


class TestHelpers:
    """Tests for small expression helpers"""

    def test_root_call(self) -> None:
        """Test that the root call is the innermost identifier call"""
        root = Call(callee=Identifier(name="text"), args=())
        frames = call_chain(_method(root, "notNull"))
        assert root_call(frames) == CallFrame("text", (), is_method=False)
        assert root_call([]) is None

    def test_unwrap_parens(self) -> None:
        """Test that nested parentheses are removed"""
        inner = ObjectLiteral(properties=())
        assert unwrap_parens(Parenthesized(expression=Parenthesized(expression=inner))) == inner
        assert unwrap_parens(None) is None

    def test_callee_name(self) -> None:
        """Test callee names of plain and member calls"""
        assert callee_name(Call(callee=Identifier(name="many"), args=())) == "many"
        member = Call(callee=PropertyAccess(object=Identifier(name="h"), name="one"), args=())
        assert callee_name(member) == "one"
        assert callee_name(Identifier(name="many")) is None

    def test_member_name(self) -> None:
        """Test accessed property names"""
        assert member_name(PropertyAccess(object=Identifier(name="t"), name="email")) == "email"
        assert member_name(Identifier(name="email")) is None

    def test_is_true(self) -> None:
        """Test boolean literal detection"""
        assert is_true(BooleanLiteral(value=True)) is True
        assert is_true(BooleanLiteral(value=False)) is False
        assert is_true(StringLiteral(value="true")) is False

    def test_object_get_last_duplicate_wins(self) -> None:
        """Test that the last duplicate key of an object wins"""
        obj = ObjectLiteral(properties=(("a", NumberLiteral(value=1)), ("a", NumberLiteral(value=2))))
        assert obj.get("a") == NumberLiteral(value=2)
        assert obj.get("b") is None

    def test_text_not_compared(self) -> None:
        """Test that raw source text does not affect equality"""
        assert StringLiteral(value="x", text='"x"') == StringLiteral(value="x", text="'x'")
